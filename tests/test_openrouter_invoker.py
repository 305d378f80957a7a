from __future__ import annotations

import io
import socket
from typing import Mapping
from urllib.error import HTTPError, URLError

import pytest

from recolor_engine.config import TransportTimeouts
from recolor_engine.errors import ConfigError, NetworkError, ProtocolError
from recolor_engine.providers.base import HttpResponse
from recolor_engine.providers.openrouter import OpenRouterInvoker, UrllibTransport


class StaticTransport:
    def __init__(self, response: HttpResponse) -> None:
        self.response = response
        self.calls: list[tuple[str, bytes, dict[str, str]]] = []

    def post(self, url: str, body: bytes, headers: Mapping[str, str]) -> HttpResponse:
        self.calls.append((url, body, dict(headers)))
        return self.response


class DummyResponse:
    def __init__(self, raw: bytes, status: int = 200) -> None:
        self._raw = raw
        self.status = status

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> "DummyResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


def test_invoke_sends_bearer_and_json_headers() -> None:
    transport = StaticTransport(HttpResponse(200, '{"choices": []}'))
    invoker = OpenRouterInvoker(transport, endpoint="https://example.test/v1/chat/completions")

    body = invoker.invoke('{"model": "m"}', "sk-test")

    assert body == '{"choices": []}'
    url, sent, headers = transport.calls[0]
    assert url == "https://example.test/v1/chat/completions"
    assert sent == b'{"model": "m"}'
    assert headers["Authorization"] == "Bearer sk-test"
    assert headers["Content-Type"] == "application/json; charset=utf-8"


def test_non_2xx_keeps_status_and_body() -> None:
    transport = StaticTransport(HttpResponse(401, '{"error":"invalid key"}'))
    invoker = OpenRouterInvoker(transport)

    with pytest.raises(NetworkError) as excinfo:
        invoker.invoke("{}", "sk-test")

    assert excinfo.value.status_code == 401
    assert excinfo.value.body == '{"error":"invalid key"}'
    assert "401" in str(excinfo.value)
    assert '{"error":"invalid key"}' in str(excinfo.value)


def test_empty_body_is_protocol_error() -> None:
    invoker = OpenRouterInvoker(StaticTransport(HttpResponse(200, "")))
    with pytest.raises(ProtocolError, match="no content"):
        invoker.invoke("{}", "sk-test")


def test_blank_key_never_posts() -> None:
    transport = StaticTransport(HttpResponse(200, "{}"))
    with pytest.raises(ConfigError):
        OpenRouterInvoker(transport).invoke("{}", "   ")
    assert transport.calls == []


def test_urllib_transport_returns_body(monkeypatch) -> None:
    captured: dict[str, object] = {}

    def fake_urlopen(req, timeout=0):
        captured["method"] = req.get_method()
        captured["data"] = req.data
        captured["auth"] = req.get_header("Authorization")
        captured["timeout"] = timeout
        return DummyResponse(b'{"ok": true}', status=200)

    monkeypatch.setattr("recolor_engine.providers.openrouter.urlopen", fake_urlopen)
    transport = UrllibTransport(TransportTimeouts(connect_s=5, read_s=30, write_s=10))

    response = transport.post("https://example.test", b"{}", {"Authorization": "Bearer k"})

    assert response == HttpResponse(200, '{"ok": true}')
    assert captured["method"] == "POST"
    assert captured["data"] == b"{}"
    assert captured["auth"] == "Bearer k"
    assert captured["timeout"] == 30


def test_urllib_transport_returns_http_errors_as_responses(monkeypatch) -> None:
    def fake_urlopen(req, timeout=0):
        raise HTTPError(req.full_url, 429, "Too Many Requests", {}, io.BytesIO(b"slow down"))

    monkeypatch.setattr("recolor_engine.providers.openrouter.urlopen", fake_urlopen)

    response = UrllibTransport().post("https://example.test", b"{}", {})

    assert response.status_code == 429
    assert response.body == "slow down"
    assert not response.ok


class TimingOutBody:
    def read(self, *args) -> bytes:
        raise TimeoutError("timed out")

    def close(self) -> None:
        pass


def test_urllib_transport_error_body_timeout_is_network_error(monkeypatch) -> None:
    def fake_urlopen(req, timeout=0):
        raise HTTPError(req.full_url, 502, "Bad Gateway", {}, TimingOutBody())

    monkeypatch.setattr("recolor_engine.providers.openrouter.urlopen", fake_urlopen)

    with pytest.raises(NetworkError) as excinfo:
        UrllibTransport().post("https://example.test", b"{}", {})
    assert excinfo.value.status_code == 502
    assert "502" in str(excinfo.value)


@pytest.mark.parametrize(
    "exc",
    [
        URLError("connection refused"),
        socket.timeout("timed out"),
        TimeoutError("timed out"),
        ConnectionResetError("reset"),
    ],
)
def test_urllib_transport_failures_are_network_errors(monkeypatch, exc: Exception) -> None:
    def fake_urlopen(req, timeout=0):
        raise exc

    monkeypatch.setattr("recolor_engine.providers.openrouter.urlopen", fake_urlopen)

    with pytest.raises(NetworkError) as excinfo:
        UrllibTransport().post("https://example.test", b"{}", {})
    assert excinfo.value.status_code is None
