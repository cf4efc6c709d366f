"""
Backend for OpenAI-compatible chat-completion APIs (OpenRouter by default).

One ``POST {base_url}/chat/completions`` is issued per call, authenticated
with a bearer token and carrying the ``HTTP-Referer``/``X-Title`` attribution
headers OpenRouter uses to identify the calling application.  No retries are
attempted.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import UpstreamMalformedResponse, UpstreamTransportError
from ..prompts import UpstreamPrompt
from .base import TextGenerationBackend

logger = logging.getLogger("codegenius")


def _error_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or "No error details available"


class OpenRouterBackend(TextGenerationBackend):
    """Call a chat-completion endpoint over HTTP using ``httpx``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        model: str = "openai/gpt-3.5-turbo",
        referer: str = "https://codegenius.ai",
        app_title: str = "CodeGenius",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Parameters
        ----------
        api_key: str
            Bearer token for the upstream API.
        base_url: str
            Base URL; ``/chat/completions`` is appended.
        model: str
            Model identifier sent in every request.
        referer, app_title: str
            Values of the ``HTTP-Referer`` and ``X-Title`` headers.
        timeout: float
            Timeout in seconds applied by ``httpx`` to the whole call.
        transport: httpx.AsyncBaseTransport, optional
            Custom transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.referer = referer
        self.app_title = app_title
        self.timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.app_title,
        }

    def build_payload(
        self,
        prompt: UpstreamPrompt,
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": prompt.to_messages(),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    async def complete(
        self,
        prompt: UpstreamPrompt,
        temperature: float,
        max_tokens: int,
    ) -> str:
        payload = self.build_payload(prompt, temperature, max_tokens)
        logger.info(
            "Calling upstream %s (model=%s, max_tokens=%s, temperature=%s)",
            self.endpoint,
            self.model,
            max_tokens,
            temperature,
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, headers=self._headers(), json=payload)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(
                f"Upstream request failed: {exc}",
                details=type(exc).__name__,
            ) from exc

        logger.info("Upstream response status: %s", response.status_code)

        if response.is_error:
            raise UpstreamTransportError(
                f"Upstream returned status {response.status_code}",
                details=_error_details(response),
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamMalformedResponse(
                "Invalid API response format",
                details=response.text,
            ) from exc

        return _first_choice_content(data)


def _first_choice_content(data: Any) -> str:
    """Return ``choices[0].message.content`` or raise if it is absent or empty."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise UpstreamMalformedResponse("Invalid API response format", details=data)
    if not isinstance(content, str) or not content:
        raise UpstreamMalformedResponse("Invalid API response format", details=data)
    return content
