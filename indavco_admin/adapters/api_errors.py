"""Typed transport failures raised by the content API adapters.

The content backend answers errors with a JSON envelope such as
``{"success": false, "message": "..."}``. Validation failures may add an
``errors`` member, either a list of ``{"msg"|"message", "path"|"field"}``
items or a mapping of field name to message. Helpers here turn whatever
arrives into short readable text and never raise themselves.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

_BODY_SNIPPET = 400
_HINT_LIMIT = 200
_MAX_HINT_ITEMS = 3


class ApiError(RuntimeError):
    """Base class for content API failures.

    ``server_message`` is the backend's own ``message`` text; ``hint`` a
    condensed rendering of its validation details.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        server_message: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.server_message = server_message
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the content API (includes server-side validation)."""


class ApiServerError(ApiError):
    """HTTP 5xx from the content API."""


class ApiTimeoutError(ApiError):
    """The API could not be reached (timeout or refused connection)."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def error_body(resp: Any) -> Any:
    """Decoded JSON error body, else a snippet of the raw text, else ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:_BODY_SNIPPET] or None


def server_message(body: Any) -> Optional[str]:
    """Return the backend's own ``message`` text when it sent one."""
    if isinstance(body, dict):
        return _clean(body.get("message"))
    return None


def describe_failure(ctx: str, status: int, body: Any) -> str:
    """Log-friendly one-liner: context, best message and status."""
    detail = server_message(body) or _clean(body if isinstance(body, str) else None)
    if detail is None and isinstance(body, dict):
        detail = _clean(body.get("error")) or _clean(body.get("detail"))
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def validation_hint(body: Any) -> Optional[str]:
    """Condense validation details into ``"field: msg; field: msg"``."""
    if not isinstance(body, dict):
        return None
    errors = body.get("errors", body.get("details"))
    if isinstance(errors, list):
        return _join(_list_item_text(item) for item in errors)
    if isinstance(errors, dict):
        return _join(_field_text(field, value) for field, value in errors.items())
    return _clean(errors) or _clean(body.get("hint"))


def _list_item_text(item: Any) -> Optional[str]:
    if not isinstance(item, dict):
        return _clean(item)
    text = _clean(item.get("msg")) or _clean(item.get("message"))
    field = _clean(item.get("path")) or _clean(item.get("field")) or _clean(item.get("param"))
    if text and field:
        return f"{field}: {text}"
    return text


def _field_text(field: str, value: Any) -> Optional[str]:
    text = _clean(value.get("message")) if isinstance(value, dict) else _clean(value)
    return f"{field}: {text}" if text else None


def _join(parts: Iterable[Optional[str]]) -> Optional[str]:
    kept: List[str] = [part for part in parts if part][:_MAX_HINT_ITEMS]
    if not kept:
        return None
    return "; ".join(kept)[:_HINT_LIMIT]


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "describe_failure",
    "error_body",
    "server_message",
    "validation_hint",
]
