"""JSON over HTTP for the GitHub REST client.

GitHubService talks to an HttpClient. Production uses RealHttpClient (urllib,
token authentication); tests script a MockHttpClient by URL.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol

from ghrelease import __version__
from ghrelease.core.result import Err, Ok, Result
from ghrelease.core.structured import as_str_dict, get_str

__all__ = ["HttpClient", "HttpError", "MockHttpClient", "RealHttpClient"]


@dataclass(frozen=True, slots=True)
class HttpError:
    """A failed request. ``status`` is 0 when no HTTP response came back."""

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


class HttpClient(Protocol):
    def get_json(self, url: str) -> Result[object, HttpError]:
        """GET url and parse the body as JSON."""
        ...

    def post_json(self, url: str, payload: dict[str, object]) -> Result[object, HttpError]:
        """POST payload as JSON to url and parse the response body."""
        ...


def _error_message(e: urllib.error.HTTPError) -> str:
    try:
        body: object = json.loads(e.read().decode("utf-8"))
    except (OSError, ValueError):
        return str(e.reason)
    data = as_str_dict(body)
    if data is None:
        return str(e.reason)
    message = get_str(data, "message") or str(e.reason)
    errors = data.get("errors")
    if isinstance(errors, list) and errors:
        details = [get_str(d, "code") or "" for d in errors if isinstance(d, dict)]
        details = [d for d in details if d]
        if details:
            message = f"{message} ({', '.join(details)})"
    return message


class RealHttpClient:
    """urllib client for the GitHub REST API.

    Every request is authenticated with the configured token and asks for the
    GitHub v3 JSON media type.
    """

    def __init__(
        self,
        token: str,
        timeout: float = 30.0,
        user_agent: str = f"ghrelease/{__version__}",
    ) -> None:
        self.timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {token}",
        }
        self._ssl_context = ssl.create_default_context()

    def _request(
        self, url: str, *, method: str, data: bytes | None = None
    ) -> Result[object, HttpError]:
        headers = dict(self._headers)
        if data is not None:
            headers["Content-Type"] = "application/json"
        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            return Ok(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

    def get_json(self, url: str) -> Result[object, HttpError]:
        return self._request(url, method="GET")

    def post_json(self, url: str, payload: dict[str, object]) -> Result[object, HttpError]:
        return self._request(url, method="POST", data=json.dumps(payload).encode("utf-8"))


_NOT_FOUND = object()


class MockHttpClient:
    """HttpClient serving canned responses keyed by exact URL.

    Unknown URLs answer 404. Requests are recorded in ``calls`` and POST
    bodies in ``posted``.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], object | HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.posted: list[tuple[str, dict[str, object]]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        self._responses[("GET", url)] = response

    def set_post(self, url: str, response: object | HttpError) -> None:
        self._responses[("POST", url)] = response

    def _reply(self, method: str, url: str) -> Result[object, HttpError]:
        self.calls.append((method, url))
        response = self._responses.get((method, url), _NOT_FOUND)
        if response is _NOT_FOUND:
            return Err(HttpError(url=url, status=404, message="Not Found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_json(self, url: str) -> Result[object, HttpError]:
        return self._reply("GET", url)

    def post_json(self, url: str, payload: dict[str, object]) -> Result[object, HttpError]:
        self.posted.append((url, payload))
        return self._reply("POST", url)
