"""
Text-generation backends for the code-assist gateway.

The gateway talks to the model only through the
``TextGenerationBackend`` interface from ``base.py``.  The concrete
``OpenRouterBackend`` targets any OpenAI-compatible chat-completion API.
Tests substitute their own implementation of the interface.
"""

from .base import TextGenerationBackend
from .openrouter import OpenRouterBackend

__all__ = [
    "TextGenerationBackend",
    "OpenRouterBackend",
]
