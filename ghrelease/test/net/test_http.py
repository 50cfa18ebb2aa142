"""Tests for net/http.py - HTTP client abstraction."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from ghrelease.core.result import Err, Ok
from ghrelease.net import http as http_mod
from ghrelease.net.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://api.github.com/x", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://api.github.com/x)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://api.github.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://api.github.com)"


class TestMockHttpClient:
    def test_post_unknown_url_is_404(self) -> None:
        client: HttpClient = MockHttpClient()
        result = client.post_json("https://api/releases", {"name": "v1"})
        assert isinstance(result, Err)
        assert result.error.status == 404
        assert isinstance(client, MockHttpClient)
        assert client.posted == [("https://api/releases", {"name": "v1"})]
        assert client.calls == [("POST", "https://api/releases")]

    def test_get_json(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api/x", [{"name": "main"}])
        assert client.get_json("https://api/x") == Ok([{"name": "main"}])
        assert client.calls == [("GET", "https://api/x")]

    def test_get_json_unknown_url_is_404(self) -> None:
        result = MockHttpClient().get_json("https://api/missing")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_scripted_error(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api/x", HttpError(url="https://api/x", status=502, message="Bad"))
        result = client.get_json("https://api/x")
        assert isinstance(result, Err)
        assert result.error.status == 502

    def test_post_records_payload(self) -> None:
        client = MockHttpClient()
        client.set_post("https://api/releases", {"html_url": "u"})
        assert client.post_json("https://api/releases", {"name": "n"}) == Ok({"html_url": "u"})
        assert client.posted == [("https://api/releases", {"name": "n"})]


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *args: object) -> None:
        return None


class TestRealHttpClient:
    def test_sends_auth_headers_and_parses_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, Any] = {}

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            seen["url"] = req.full_url
            seen["method"] = req.get_method()
            seen["auth"] = req.get_header("Authorization")
            seen["accept"] = req.get_header("Accept")
            return _FakeResponse(b'{"tag_name": "v1.0.0"}')

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("secret").get_json("https://api.github.com/repos/o/r")

        assert result == Ok({"tag_name": "v1.0.0"})
        assert seen["method"] == "GET"
        assert seen["auth"] == "token secret"
        assert seen["accept"] == "application/vnd.github+json"

    def test_post_sends_json_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, Any] = {}

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            seen["method"] = req.get_method()
            seen["body"] = json.loads(req.data or b"{}")  # type: ignore[arg-type]
            seen["content_type"] = req.get_header("Content-type")
            return _FakeResponse(b'{"html_url": "https://github.com/o/r/releases/tag/v1"}')

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").post_json("https://api/releases", {"name": "v1"})

        assert isinstance(result, Ok)
        assert seen == {
            "method": "POST",
            "body": {"name": "v1"},
            "content_type": "application/json",
        }

    def test_http_error_uses_github_message(self, monkeypatch: pytest.MonkeyPatch) -> None:
        body = json.dumps(
            {"message": "Validation Failed", "errors": [{"code": "already_exists"}]}
        ).encode()

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            raise urllib.error.HTTPError(
                req.full_url, 422, "Unprocessable Entity", Message(), io.BytesIO(body)
            )

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").post_json("https://api/releases", {})

        assert isinstance(result, Err)
        assert result.error.status == 422
        assert result.error.message == "Validation Failed (already_exists)"

    def test_network_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            raise urllib.error.URLError("connection refused")

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").get_json("https://api/x")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.message == "connection refused"

    def test_invalid_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            return _FakeResponse(b"<html>")

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").get_json("https://api/x")

        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message
