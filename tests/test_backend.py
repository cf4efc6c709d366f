"""
Tests for the OpenRouter chat-completion backend.

The upstream API is replaced with ``httpx.MockTransport`` so the exact
outbound request can be inspected and any reply (or transport failure)
simulated without network access.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from codegenius.api.main import create_app
from codegenius.backend import OpenRouterBackend
from codegenius.config import Config
from codegenius.errors import UpstreamMalformedResponse, UpstreamTransportError
from codegenius.prompts import UpstreamPrompt


PROMPT = UpstreamPrompt(system_instruction="You are a test.", user_content="print(1)")


def echo_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "ECHO"}}]})


def make_backend(handler, **kwargs) -> OpenRouterBackend:
    return OpenRouterBackend(api_key="sk-test", transport=httpx.MockTransport(handler), **kwargs)


def complete(backend: OpenRouterBackend, temperature: float = 0.7, max_tokens: int = 1024) -> str:
    return asyncio.run(backend.complete(PROMPT, temperature=temperature, max_tokens=max_tokens))


def test_outbound_request_shape():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return echo_handler(request)

    backend = make_backend(handler, base_url="https://llm.example/api/v1/", model="test/model")
    assert complete(backend, temperature=0.3, max_tokens=512) == "ECHO"

    (request,) = seen
    assert request.method == "POST"
    assert str(request.url) == "https://llm.example/api/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-test"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["http-referer"] == "https://codegenius.ai"
    assert request.headers["x-title"] == "CodeGenius"

    body = json.loads(request.content)
    assert body == {
        "model": "test/model",
        "messages": [
            {"role": "system", "content": "You are a test."},
            {"role": "user", "content": "print(1)"},
        ],
        "max_tokens": 512,
        "temperature": 0.3,
    }


def test_non_2xx_raises_transport_error_with_details():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "internal"}})

    with pytest.raises(UpstreamTransportError) as excinfo:
        complete(make_backend(handler))
    assert "500" in excinfo.value.message
    assert excinfo.value.details == {"error": {"message": "internal"}}


def test_network_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamTransportError):
        complete(make_backend(handler))


@pytest.mark.parametrize(
    "reply",
    [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{"message": {"content": None}}]},
        ["not", "an", "object"],
    ],
)
def test_unusable_reply_raises_malformed(reply):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=reply)

    with pytest.raises(UpstreamMalformedResponse):
        complete(make_backend(handler))


def test_non_json_reply_raises_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(UpstreamMalformedResponse):
        complete(make_backend(handler))


@pytest.mark.parametrize("path", ["/api/execute", "/api/fix"])
def test_round_trip_through_http(path):
    client = TestClient(create_app(Config(api_key="sk-test"), backend=make_backend(echo_handler)))
    res = client.post(path, json={"text": "print('hello')", "language": "python"})
    assert res.status_code == 200
    assert res.json() == {"text": "ECHO", "isError": False}


def test_upstream_500_through_http_uses_error_policy():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    client = TestClient(create_app(Config(api_key="sk-test"), backend=make_backend(handler)))
    res = client.post("/api/execute", json={"text": "print(1)"})
    assert res.status_code == 500
    data = res.json()
    assert data["isError"] is True
    assert data["errorDetails"] == {"error": "boom"}
