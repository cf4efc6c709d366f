"""Exceptions raised by the gateway and its upstream backend."""

from __future__ import annotations

from typing import Any, Optional


class GatewayError(Exception):
    """Base class for all gateway errors."""


class ClientInputError(GatewayError):
    """The request is unusable as sent (missing or invalid field)."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class UpstreamError(GatewayError):
    """The text-generation backend could not produce a usable reply."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class UpstreamTransportError(UpstreamError):
    """Network failure or non-2xx status from the backend."""


class UpstreamMalformedResponse(UpstreamError):
    """The backend answered, but without a usable completion."""
