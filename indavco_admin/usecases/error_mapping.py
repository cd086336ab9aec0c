"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional, Type, TypeVar

from indavco_admin.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    validation_hint,
)
from indavco_admin.domain.ports import UseCaseError

E = TypeVar("E", bound=UseCaseError)


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
    error_type: Type[E] = UseCaseError,  # type: ignore[assignment]
    prefer_server_message: bool = False,
) -> E:
    """Map adapter exceptions to stable UseCaseError codes.

    ``error_type`` selects the UseCaseError subclass to build (for example
    ``MutationError``). With ``prefer_server_message`` a ``message`` sent by
    the API replaces the generic text, which is how the console shows
    backend validation errors inside the open form.
    """
    if isinstance(exc, error_type):
        return exc
    if isinstance(exc, UseCaseError):
        return error_type(exc.code, exc.message, meta=exc.meta)

    server_text = _server_text(exc) if prefer_server_message else None
    if isinstance(exc, ApiTimeoutError):
        return error_type("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or validation_hint(exc.payload)
        meta = {"status": status}
        if status in (401, 403):
            return error_type("AUTH_FAILED", server_text or "Auth failed / session expired.", meta=meta)
        if status in (400, 422):
            message = server_text or _compose_error_message("Invalid parameters", hint)
            return error_type("INVALID_PARAMS", message, meta=meta)
        if status == 404:
            return error_type("NOT_FOUND", server_text or "Item no longer exists.", meta=meta)
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return error_type("REQUEST_FAILED", server_text or _compose_error_message(label, hint), meta=meta)
    if isinstance(exc, ApiServerError):
        message = server_text or default_message or "Server error, try again."
        return error_type("SERVER_ERROR", message, meta={"status": exc.status})
    if isinstance(exc, ApiError):
        return error_type("API_ERROR", server_text or default_message or str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return error_type(default_code, message)


def _server_text(exc: Exception) -> Optional[str]:
    if not isinstance(exc, ApiError):
        return None
    text = (exc.server_message or "").strip()
    return text or None


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
