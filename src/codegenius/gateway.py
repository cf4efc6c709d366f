"""
The code-assist gateway.

:class:`CodeAssistGateway` validates a request, builds the upstream prompt,
calls the text-generation backend once and maps the outcome to a
:class:`~codegenius.models.ResponseEnvelope`.

Outcomes:

* missing body or missing/empty ``text``:
  :class:`~codegenius.errors.ClientInputError` is raised before anything
  else happens.
* no API key configured: the operation's mock response, ``isError: false``.
* upstream success: the model's text, ``isError: false``.
* upstream failure: depends on ``Config.failure_policy``.  ``error`` yields
  an envelope with ``isError: true`` and the error details; ``fallback``
  yields the operation's canned fallback text with ``isError: false``.  The
  same policy applies to every operation.
"""

from __future__ import annotations

import logging
from typing import Optional

from . import mocks
from .backend import OpenRouterBackend, TextGenerationBackend
from .config import Config
from .errors import ClientInputError, UpstreamError
from .models import CodeAssistRequest, Operation, ResponseEnvelope
from .prompts import build_prompt

logger = logging.getLogger("codegenius")

MISSING_TEXT_MESSAGE = "Missing required parameter: text"


class CodeAssistGateway:
    """Translate code-assist requests into upstream calls and normalise the result."""

    def __init__(self, config: Config, backend: Optional[TextGenerationBackend] = None) -> None:
        self.config = config
        if backend is None and config.upstream_configured:
            backend = OpenRouterBackend(
                api_key=config.api_key,
                base_url=config.upstream_url,
                model=config.model,
                referer=config.referer,
                app_title=config.app_title,
                timeout=config.upstream_timeout,
            )
        self.backend = backend

    async def handle(self, operation: Operation, request: Optional[CodeAssistRequest]) -> ResponseEnvelope:
        """Run ``operation`` for ``request`` and return the response envelope."""
        if request is None or not request.text or not request.text.strip():
            raise ClientInputError(MISSING_TEXT_MESSAGE)

        if not self.config.upstream_configured or self.backend is None:
            logger.info("No API key configured; returning mock %s response", operation.value)
            return ResponseEnvelope(text=mocks.UNCONFIGURED[operation])

        prompt = build_prompt(operation, request.text, request.language)
        try:
            text = await self.backend.complete(
                prompt,
                temperature=request.resolved_temperature(operation),
                max_tokens=request.resolved_max_tokens(),
            )
        except UpstreamError as exc:
            logger.error("Upstream %s call failed: %s", operation.value, exc.message)
            logger.error("Error details: %s", exc.details if exc.details is not None else "No response data")
            return self._on_upstream_failure(operation, exc)

        return ResponseEnvelope(text=text)

    def _on_upstream_failure(self, operation: Operation, exc: UpstreamError) -> ResponseEnvelope:
        if self.config.failure_policy == "fallback":
            return ResponseEnvelope(text=mocks.FALLBACK[operation])
        return ResponseEnvelope(
            text=f"Error calling AI service: {exc.message}. Please try again later.",
            is_error=True,
            error_message=exc.message,
            error_details=exc.details if exc.details is not None else "No error details available",
        )
