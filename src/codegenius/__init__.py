"""CodeGenius code-assist gateway package.

This package exposes an HTTP API that forwards code snippets to a
chat-completion model ("execute" narrates the output of running the code,
"fix" returns an improved version plus an explanation) and relays the
model's reply in a uniform response envelope.

The top-level modules include:

* ``config`` – configuration handling for environment variables.
* ``models`` – Pydantic models defining request and response schemas.
* ``prompts`` – construction of the upstream system/user messages.
* ``backend`` – text-generation backends (OpenRouter over ``httpx``).
* ``gateway`` – validation, upstream call and response normalisation.
* ``mocks`` – canned responses used without an API key or as fallback.
* ``api`` – FastAPI application exposing HTTP endpoints.
* ``smoke`` – command-line smoke test against a running server.
"""
