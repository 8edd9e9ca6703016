from __future__ import annotations

import json

import pytest
import requests

from fetch_retry import FetchOptions, RetryingFetch, retrying_fetch
from fetch_retry.infrastructure.http_client import DEFAULT_TIMEOUT, fetch


def _make_response(status_code: int, payload: dict | None = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    r.url = "http://example.test"
    if payload is None:
        payload = {}
    r._content = json.dumps(payload).encode("utf-8")  # type: ignore[attr-defined]
    r.headers["Content-Type"] = "application/json"
    return r


@pytest.mark.asyncio
async def test_fetch_forwards_passthrough_options(monkeypatch):
    seen = {}

    def fake_request(method, url, **kwargs):
        seen.update(method=method, url=url, kwargs=kwargs)
        return _make_response(201, {"ok": True})

    monkeypatch.setattr(requests, "request", fake_request)

    resp = await fetch(
        "http://example.test",
        {"retries": 2, "method": "post", "json": {"x": 1}, "timeout": 5},
    )

    assert resp.status_code == 201
    assert seen["method"] == "POST"
    assert seen["url"] == "http://example.test"
    assert seen["kwargs"] == {"json": {"x": 1}, "timeout": 5}


@pytest.mark.asyncio
async def test_fetch_defaults(monkeypatch):
    seen = {}

    def fake_request(method, url, **kwargs):
        seen.update(method=method, kwargs=kwargs)
        return _make_response(200)

    monkeypatch.setattr(requests, "request", fake_request)

    await fetch("http://example.test")

    assert seen["method"] == "GET"
    assert seen["kwargs"] == {"timeout": DEFAULT_TIMEOUT}


@pytest.mark.asyncio
async def test_retrying_fetch_retries_network_errors(monkeypatch):
    calls = {"n": 0}

    def fake_request(method, url, **kwargs):
        calls["n"] += 1
        if calls["n"] < 3:
            raise requests.exceptions.ConnectionError("connection refused")
        return _make_response(200, {"ok": True})

    monkeypatch.setattr(requests, "request", fake_request)

    resp = await retrying_fetch("http://example.test")

    assert resp.status_code == 200
    assert calls["n"] == 3


@pytest.mark.asyncio
async def test_retrying_fetch_does_not_retry_on_5xx(monkeypatch):
    calls = {"n": 0}

    def fake_request(method, url, **kwargs):
        calls["n"] += 1
        return _make_response(500, {"error": "boom"})

    monkeypatch.setattr(requests, "request", fake_request)

    resp = await retrying_fetch("http://example.test")

    assert resp.status_code == 500
    assert calls["n"] == 1


@pytest.mark.asyncio
async def test_retrying_fetch_raises_last_network_error(monkeypatch):
    errors = [requests.exceptions.ConnectionError(f"attempt {i}") for i in range(2)]

    def fake_request(method, url, **kwargs):
        raise errors.pop(0)

    monkeypatch.setattr(requests, "request", fake_request)

    with pytest.raises(requests.exceptions.ConnectionError, match="attempt 1"):
        await RetryingFetch()("http://example.test", FetchOptions(retries=1))

    assert errors == []
