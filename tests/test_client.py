from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

import prompt_playground.client.ollama_chat as client_mod
from prompt_playground.client.ollama_chat import CompletionClient
from prompt_playground.common.errors import (
    HttpStatusError,
    MalformedResponseError,
    MissingCredentialError,
    NotInitializedError,
    TransportError,
)
from prompt_playground.common.schema import DEFAULT_ENDPOINT, ModelConfig


def _reply(content: Any) -> dict[str, Any]:
    return {
        "model": "llama3.2",
        "message": {"role": "assistant", "content": content},
        "done": True,
        "eval_count": 12,
    }


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    config: ModelConfig | None = None,
) -> CompletionClient:
    client = CompletionClient(config, transport=httpx.MockTransport(handler))
    client.initialize()
    return client


def test_generate_before_initialize_fails() -> None:
    client = CompletionClient()
    assert not client.is_connected
    with pytest.raises(NotInitializedError):
        client.generate_response("test")


def test_initialize_is_idempotent() -> None:
    client = CompletionClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=_reply("x"))))
    client.initialize()
    client.initialize()
    assert client.is_connected
    assert client.generate_response("hi") == "x"
    client.close()
    assert not client.is_connected


def test_success_returns_content_unmodified_and_sends_chat_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_reply("  Hello test\n"))

    client = _client(handler, ModelConfig(model="llama3.2", temperature=0.3))
    assert client.generate_response("Explain AI") == "  Hello test\n"

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == DEFAULT_ENDPOINT
    assert "authorization" not in request.headers
    assert json.loads(request.content) == {
        "model": "llama3.2",
        "messages": [{"role": "user", "content": "Explain AI"}],
        "stream": False,
        "options": {"temperature": 0.3},
    }


def test_options_omitted_when_no_sampling_params() -> None:
    bodies: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=_reply("ok"))

    client = _client(handler, ModelConfig(temperature=None))
    client.generate_response("hi")
    assert "options" not in bodies[0]


def test_max_tokens_sent_as_num_predict() -> None:
    bodies: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=_reply("ok"))

    client = _client(handler, ModelConfig(temperature=None, max_tokens=64))
    client.generate_response("hi")
    assert bodies[0]["options"] == {"num_predict": 64}


def test_api_key_sent_as_bearer_token() -> None:
    headers: list[httpx.Headers] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers)
        return httpx.Response(200, json=_reply("ok"))

    client = _client(handler)
    client.set_api_key("secret")
    client.generate_response("hi")
    assert headers[0]["authorization"] == "Bearer secret"


def test_missing_credential_when_required() -> None:
    client = _client(lambda r: httpx.Response(200, json=_reply("ok")), ModelConfig(require_api_key=True))
    with pytest.raises(MissingCredentialError):
        client.generate_response("hi")
    client.set_api_key("k")
    assert client.generate_response("hi") == "ok"


def test_connection_error_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(TransportError):
        client.generate_response("hi")


def test_timeout_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportError):
        _client(handler).generate_response("hi")


def test_non_2xx_is_http_status_error() -> None:
    client = _client(lambda r: httpx.Response(404, json={"error": "model not found"}))
    with pytest.raises(HttpStatusError) as excinfo:
        client.generate_response("hi")
    assert excinfo.value.status_code == 404


@pytest.mark.parametrize(
    "body",
    [
        {"done": True},
        {"message": {"role": "assistant"}},
        {"message": {"role": "assistant", "content": 42}},
        {"message": "text"},
    ],
)
def test_missing_content_is_malformed(body: dict[str, Any]) -> None:
    client = _client(lambda r: httpx.Response(200, json=body))
    with pytest.raises(MalformedResponseError):
        client.generate_response("hi")


def test_non_json_body_is_malformed() -> None:
    client = _client(lambda r: httpx.Response(200, text="<html>not json</html>"))
    with pytest.raises(MalformedResponseError):
        client.generate_response("hi")


def test_set_model_changes_request_model() -> None:
    bodies: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=_reply("ok"))

    client = _client(handler)
    client.set_model("mistral")
    assert client.model_name == "mistral"
    client.generate_response("hi")
    assert bodies[0]["model"] == "mistral"


def test_process_requires_connection() -> None:
    client = CompletionClient()
    with pytest.raises(NotInitializedError):
        client.process()


class _FakeResponse:
    status_code = 200
    is_success = True
    text = ""

    def __init__(self, json_data: dict[str, Any]) -> None:
        self._json = json_data

    def json(self) -> dict[str, Any]:
        return self._json


class _FakeClient:
    def __init__(self, timeout: float | None = None, transport: Any = None) -> None:  # signature-compatible
        self.timeout = timeout
        self.closed = False

    def post(self, url: str, headers: dict[str, str] | None = None, json: dict[str, Any] | None = None) -> _FakeResponse:  # noqa: A002
        return _FakeResponse(_reply("Hello test"))

    def close(self) -> None:
        self.closed = True


def test_initialize_builds_client_with_configured_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    # Patch httpx.Client in the module to avoid network calls
    monkeypatch.setattr(client_mod.httpx, "Client", _FakeClient)
    client = CompletionClient(ModelConfig(timeout=5.0))
    client.initialize()
    assert client._http.timeout == 5.0  # type: ignore[union-attr]
    assert client.generate_response("test") == "Hello test"


def test_context_manager_initializes_and_closes() -> None:
    with CompletionClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=_reply("ok")))) as client:
        assert client.is_connected
        assert client.generate_response("hi") == "ok"
    assert not client.is_connected


def test_invalid_endpoint_url_is_transport_error() -> None:
    client = _client(lambda r: httpx.Response(200, json=_reply("ok")), ModelConfig(endpoint="http://[::1"))
    with pytest.raises(TransportError):
        client.generate_response("hi")
