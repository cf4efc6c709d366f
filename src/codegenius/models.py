"""Pydantic models for request and response bodies.

The wire format uses camelCase keys (``maxTokens``, ``isError``...) as
expected by the CodeGenius frontend.  Python code uses the snake_case field
names; aliases map between the two.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Operation(str, Enum):
    """Code-assist operations exposed by the gateway."""

    EXECUTE = "execute"
    FIX = "fix"


DEFAULT_TEMPERATURES: Dict[Operation, float] = {
    Operation.EXECUTE: 0.7,
    Operation.FIX: 0.3,
}

DEFAULT_MAX_TOKENS = 1024

# Snippets larger than 10 MiB of text are rejected.
MAX_TEXT_LENGTH = 10 * 1024 * 1024


class CodeAssistRequest(BaseModel):
    """Request body shared by ``/api/execute`` and ``/api/fix``."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = Field(
        default=None,
        max_length=MAX_TEXT_LENGTH,
        description="Source code (or a prompt containing it) to send to the model.",
    )
    language: str = Field(default="python", description="Language of the snippet.")
    temperature: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature. Defaults to 0.7 for execute and 0.3 for fix.",
    )
    max_tokens: Optional[int] = Field(
        default=None,
        gt=0,
        alias="maxTokens",
        description="Upper bound on the length of the model reply.",
    )

    def resolved_temperature(self, operation: Operation) -> float:
        if self.temperature is None:
            return DEFAULT_TEMPERATURES[operation]
        return self.temperature

    def resolved_max_tokens(self) -> int:
        return self.max_tokens if self.max_tokens is not None else DEFAULT_MAX_TOKENS


class ResponseEnvelope(BaseModel):
    """Uniform response body returned by every code-assist endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    is_error: bool = Field(default=False, alias="isError")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    error_details: Optional[Any] = Field(default=None, alias="errorDetails")

    def to_body(self) -> Dict[str, Any]:
        """Serialise to the wire format, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class HealthResponse(BaseModel):
    """Body of the health probe."""

    status: str
    message: str
