from __future__ import annotations

import pytest
import requests

from geocode_batch.common.errors import BodyReadError, HttpStatusError, TransportError
from geocode_batch.common.http import HttpClient, RetryableHttpError, RetryConfig, TimeoutConfig


class FakeResponse:
    def __init__(self, status_code: int, body: bytes = b"", encoding: str | None = "utf-8", read_error=None):
        self.status_code = status_code
        self._body = body
        self.encoding = encoding
        self._read_error = read_error
        self.closed = False

    @property
    def content(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def close(self):
        self.closed = True


def test_get_text_returns_body_and_sends_headers(monkeypatch):
    client = HttpClient(timeout=TimeoutConfig(connect=1.0, read=2.0), user_agent="tests/1.0")
    seen = {}

    def fake_request(**kwargs):
        seen.update(kwargs)
        return FakeResponse(200, b"[]")

    monkeypatch.setattr(client.session, "request", fake_request)

    assert client.get_text("https://example.com/search?q=a b&api_key=k") == "[]"
    assert seen["method"] == "GET"
    assert seen["url"] == "https://example.com/search?q=a b&api_key=k"
    assert seen["headers"]["User-Agent"] == "tests/1.0"
    assert seen["timeout"] == (1.0, 2.0)


def test_get_text_ignores_non_retryable_status(monkeypatch):
    client = HttpClient()
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(404, b"Not found"))

    assert client.get_text("https://example.com") == "Not found"


def test_get_text_decodes_lossily(monkeypatch):
    client = HttpClient()
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(200, b"caf\xff", encoding=None))

    assert client.get_text("https://example.com") == "caf\ufffd"


def test_transport_failure_raises_transport_error(monkeypatch):
    client = HttpClient()

    def fail(**_kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(client.session, "request", fail)

    with pytest.raises(TransportError, match="connection refused"):
        client.get_text("https://example.com")


def test_body_read_failure_raises_body_read_error(monkeypatch):
    client = HttpClient()
    response = FakeResponse(200, read_error=requests.exceptions.ChunkedEncodingError("truncated"))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: response)

    with pytest.raises(BodyReadError, match="truncated"):
        client.get_text("https://example.com")
    assert response.closed


def test_retryable_status_is_not_retried_by_default(monkeypatch):
    client = HttpClient()
    calls = []

    def throttled(**_kwargs):
        calls.append(1)
        return FakeResponse(429, b"Too many requests")

    monkeypatch.setattr(client.session, "request", throttled)

    with pytest.raises(HttpStatusError):
        client.get_text("https://example.com")
    assert len(calls) == 1


def test_retryable_status_retried_when_enabled(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda _seconds: None)
    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0.0, max_wait=0.0))
    responses = iter([FakeResponse(503), FakeResponse(200, b"[]")])
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: next(responses))

    assert client.get_text("https://example.com") == "[]"


def test_retryable_status_reraises_after_budget(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda _seconds: None)
    client = HttpClient(retry=RetryConfig(max_attempts=2, multiplier=0.0, max_wait=0.0))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(502))

    with pytest.raises(RetryableHttpError):
        client.get_text("https://example.com")
