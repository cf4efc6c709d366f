"""Unit tests for CodeAssistGateway outside the HTTP layer."""

from __future__ import annotations

import asyncio

import pytest

from codegenius.backend import OpenRouterBackend
from codegenius.config import Config
from codegenius.errors import ClientInputError, UpstreamTransportError
from codegenius.gateway import CodeAssistGateway
from codegenius.models import CodeAssistRequest, Operation


class CountingBackend:
    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    async def complete(self, prompt, temperature, max_tokens):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return "ECHO"


def handle(gateway, operation, **body):
    return asyncio.run(gateway.handle(operation, CodeAssistRequest(**body)))


def test_default_backend_is_built_from_config():
    config = Config(api_key="sk-test", upstream_url="https://llm.example/v1", model="m", upstream_timeout=5)
    backend = CodeAssistGateway(config).backend
    assert isinstance(backend, OpenRouterBackend)
    assert backend.endpoint == "https://llm.example/v1/chat/completions"
    assert backend.model == "m"
    assert backend.timeout == 5


def test_no_backend_without_api_key():
    assert CodeAssistGateway(Config()).backend is None


@pytest.mark.parametrize("text", [None, "", "\n\t "])
def test_empty_text_raises_client_error(text):
    backend = CountingBackend()
    gateway = CodeAssistGateway(Config(api_key="sk-test"), backend)
    with pytest.raises(ClientInputError):
        handle(gateway, Operation.FIX, text=text)
    assert backend.calls == 0


def test_unconfigured_key_skips_injected_backend():
    backend = CountingBackend()
    envelope = handle(CodeAssistGateway(Config(), backend), Operation.EXECUTE, text="print(1)")
    assert not envelope.is_error
    assert envelope.text
    assert backend.calls == 0


def test_success_envelope_omits_error_fields():
    gateway = CodeAssistGateway(Config(api_key="sk-test"), CountingBackend())
    envelope = handle(gateway, Operation.EXECUTE, text="print(1)")
    assert envelope.to_body() == {"text": "ECHO", "isError": False}


def test_error_without_details_gets_placeholder():
    backend = CountingBackend(error=UpstreamTransportError("Upstream returned status 502"))
    envelope = handle(CodeAssistGateway(Config(api_key="sk-test"), backend), Operation.FIX, text="x")
    assert envelope.is_error
    assert envelope.error_message == "Upstream returned status 502"
    assert envelope.error_details == "No error details available"
    assert backend.calls == 1


def test_missing_request_raises_client_error():
    backend = CountingBackend()
    gateway = CodeAssistGateway(Config(api_key="sk-test"), backend)
    with pytest.raises(ClientInputError) as excinfo:
        asyncio.run(gateway.handle(Operation.EXECUTE, None))
    assert excinfo.value.message == "Missing required parameter: text"
    assert backend.calls == 0
