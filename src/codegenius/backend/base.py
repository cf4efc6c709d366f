"""
Base interface for text-generation backends.

All concrete backends should inherit from :class:`TextGenerationBackend`
and implement :meth:`complete`.  A backend turns an
:class:`~codegenius.prompts.UpstreamPrompt` into the model's reply text, or
raises an :class:`~codegenius.errors.UpstreamError` subclass.  Backends hold
no per-request state and may be shared between concurrent requests.
"""

from __future__ import annotations

import abc

from ..prompts import UpstreamPrompt


class TextGenerationBackend(abc.ABC):
    """Abstract base class defining the interface for text-generation backends."""

    @abc.abstractmethod
    async def complete(
        self,
        prompt: UpstreamPrompt,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Send ``prompt`` to the model and return the reply text.

        Parameters
        ----------
        prompt: UpstreamPrompt
            System instruction and user content.
        temperature: float
            Sampling temperature forwarded to the model.
        max_tokens: int
            Upper bound on the reply length.

        Returns
        -------
        str
            Non-empty content of the first completion choice.

        Raises
        ------
        UpstreamTransportError
            The call failed or the backend answered with a non-2xx status.
        UpstreamMalformedResponse
            The reply carried no usable completion.
        """
        raise NotImplementedError
