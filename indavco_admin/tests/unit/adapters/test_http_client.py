from __future__ import annotations

import pytest
from requests import exceptions as req_exc

from indavco_admin.adapters.api_errors import ApiTimeoutError
from indavco_admin.adapters.http_client import AuthSession, HttpConfig, RetryingSession, multipart_parts


class _RecordingSession:
    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.failures:
            self.failures -= 1
            raise req_exc.ConnectionError("down")
        return "ok"

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)


def _session(token=None, *, retries: int = 2, failures: int = 0) -> RetryingSession:
    session = RetryingSession(AuthSession(token=token), HttpConfig(request_timeout_s=5, retries=retries))
    session.session = _RecordingSession(failures)
    return session


def test_bearer_header_only_when_token_present() -> None:
    assert "Authorization" not in _session()._headers()
    assert _session("  abc ")._headers()["Authorization"] == "Bearer abc"


def test_json_requests_send_encoded_body() -> None:
    session = _session("t")

    session.send_json("POST", "https://api/x", json_body={"title": "Hola ñ"})

    method, url, kwargs = session.session.calls[0]
    assert (method, url) == ("POST", "https://api/x")
    assert kwargs["data"] == '{"title": "Hola ñ"}'.encode("utf-8")
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 5


def test_retries_connection_errors_then_succeeds() -> None:
    session = _session(failures=2)

    assert session.get("https://api/x") == "ok"
    assert len(session.session.calls) == 3


def test_exhausted_retries_raise_timeout_error() -> None:
    session = _session(retries=1, failures=5)

    with pytest.raises(ApiTimeoutError):
        session.get("https://api/x")
    assert len(session.session.calls) == 2


def test_multipart_always_uses_form_parts() -> None:
    session = _session()

    session.send_multipart("PUT", "https://api/clients/1", data={"name": "ACME", "isActive": "true"})

    _, _, kwargs = session.session.calls[0]
    assert kwargs["files"] == [("name", (None, "ACME")), ("isActive", (None, "true"))]
    assert "Content-Type" not in kwargs["headers"]


def test_multipart_parts_repeat_list_values_and_append_files() -> None:
    parts = multipart_parts({"tags": ["a", "b"]}, {"logo": ("l.png", b"x", "image/png")})

    assert parts == [
        ("tags", (None, "a")),
        ("tags", (None, "b")),
        ("logo", ("l.png", b"x", "image/png")),
    ]
