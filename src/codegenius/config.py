"""Configuration loader.

The gateway reads its configuration from environment variables (and a
``.env`` file in the working directory, if present) once at startup.  The
resulting :class:`Config` is immutable and handed explicitly to the
components that need it.  Reasonable defaults are provided so that local
development works out of the box (without an API key the service answers
with mock responses).

Environment variables:

``OPENROUTER_API_KEY``
    Bearer token for the upstream chat-completion API.  When empty, no
    upstream call is attempted and mock responses are returned.

``CODEGENIUS_UPSTREAM_URL``
    Base URL of the chat-completion API.  ``/chat/completions`` is appended.
    Defaults to ``https://openrouter.ai/api/v1``.

``CODEGENIUS_MODEL``
    Model identifier sent upstream.  Defaults to ``openai/gpt-3.5-turbo``.

``CODEGENIUS_REFERER`` / ``CODEGENIUS_APP_TITLE``
    Attribution headers (``HTTP-Referer`` and ``X-Title``) identifying this
    application to the upstream provider.

``CODEGENIUS_UPSTREAM_TIMEOUT``
    Timeout (in seconds) for the upstream call.  Default is 60.

``CODEGENIUS_FAILURE_POLICY``
    What to do when the upstream call fails: ``error`` answers HTTP 500 with
    the error details, ``fallback`` answers HTTP 200 with a canned response.
    Defaults to ``error``.

``CODEGENIUS_CORS_ORIGINS``
    ``*`` or a comma-separated list of allowed origins.  Defaults to ``*``.

``PORT``
    The port on which the API server listens.  Defaults to 4000.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import find_dotenv, load_dotenv

FAILURE_POLICIES = ("error", "fallback")


@dataclass(frozen=True)
class Config:
    """Centralised configuration object."""

    api_key: str = ""
    upstream_url: str = "https://openrouter.ai/api/v1"
    model: str = "openai/gpt-3.5-turbo"
    referer: str = "https://codegenius.ai"
    app_title: str = "CodeGenius"
    upstream_timeout: float = 60.0
    failure_policy: str = "error"
    cors_origins: Tuple[str, ...] = ("*",)
    port: int = 4000

    def __post_init__(self) -> None:
        if self.failure_policy not in FAILURE_POLICIES:
            raise ValueError(
                f"Invalid CODEGENIUS_FAILURE_POLICY: {self.failure_policy}. Use 'error' or 'fallback'."
            )

    @property
    def upstream_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def load(cls) -> "Config":
        # Variables already set in the environment take priority over .env.
        load_dotenv(find_dotenv(usecwd=True))

        # An empty key is valid: the gateway then serves mock responses.
        api_key = os.getenv("OPENROUTER_API_KEY", "").strip()

        upstream_url = os.getenv("CODEGENIUS_UPSTREAM_URL", cls.upstream_url).rstrip("/")
        model = os.getenv("CODEGENIUS_MODEL", cls.model)
        referer = os.getenv("CODEGENIUS_REFERER", cls.referer)
        app_title = os.getenv("CODEGENIUS_APP_TITLE", cls.app_title)

        failure_policy = os.getenv("CODEGENIUS_FAILURE_POLICY", cls.failure_policy).lower()

        origins_env = os.getenv("CODEGENIUS_CORS_ORIGINS", "*")
        cors_origins = tuple(o.strip() for o in origins_env.split(",") if o.strip()) or ("*",)

        def _number_var(name: str, default, cast):
            val = os.getenv(name)
            if val is None or not val.strip():
                return default
            try:
                return cast(val)
            except ValueError:
                raise ValueError(f"Invalid value for {name}: {val}")

        upstream_timeout = _number_var("CODEGENIUS_UPSTREAM_TIMEOUT", cls.upstream_timeout, float)
        port = _number_var("PORT", cls.port, int)

        return cls(
            api_key=api_key,
            upstream_url=upstream_url,
            model=model,
            referer=referer,
            app_title=app_title,
            upstream_timeout=upstream_timeout,
            failure_policy=failure_policy,
            cors_origins=cors_origins,
            port=port,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Alternate constructor used by the API to load configuration."""
        return cls.load()
