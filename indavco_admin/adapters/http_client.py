"""requests-based transport shared by every ``ContentRestAdapter``.

One ``RetryingSession`` is built per settings snapshot by
``indavco_admin.app.controller.AppController`` and shared across the five
content resources. It owns the timeout, the bearer header and the retry
loop; status-code handling stays with the adapters, and nothing above the
adapter layer retries.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from requests import exceptions as req_exc

from indavco_admin.adapters.api_errors import ApiTimeoutError

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Per-request timeout (seconds) and extra attempts after the first one."""

    request_timeout_s: int = 10
    retries: int = 2


@dataclass
class AuthSession:
    """Explicit credentials handed to the transport.

    Replaces token lookups from ambient storage: whoever builds the session
    decides which token it carries, and tests can build one without globals.
    """
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.token.strip())


class RetryingSession:
    """``requests.Session`` wrapper that retries on timeouts and refused connections.

    Any HTTP response, 4xx and 5xx included, is returned to the caller as is.
    """

    def __init__(self, auth: Optional[AuthSession], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.auth = auth or AuthSession()
        self.cfg = cfg

    def _headers(self, accept: str = "application/json", json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.auth.is_authenticated:
            headers["Authorization"] = f"Bearer {self.auth.token.strip()}"
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _with_retries(self, context: str, url: str, send: Callable[[], requests.Response]) -> requests.Response:
        """Run ``send`` until it returns or all attempts hit transport failures.

        Raises:
            ApiTimeoutError: If every attempt fails with timeout/connection errors.
        """
        last_err: ApiTimeoutError | None = None
        attempts = self.cfg.retries + 1
        for attempt in range(attempts):
            try:
                return send()
            except (req_exc.Timeout, req_exc.ConnectionError):
                LOGGER.debug("%s failed (attempt %d/%d)", context, attempt + 1, attempts)
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """GET ``url`` (JSON accepted)."""
        return self._with_retries(
            f"GET {url}",
            url,
            lambda: self.session.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def send_json(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """POST/PUT ``json_body`` as UTF-8 JSON; non-ASCII text is kept unescaped."""
        data = None if json_body is None else json.dumps(json_body, ensure_ascii=False).encode("utf-8")
        return self._with_retries(
            f"{method} {url}",
            url,
            lambda: self.session.request(
                method,
                url,
                data=data,
                headers=self._headers(json_body=json_body is not None),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def send_multipart(
        self,
        method: str,
        url: str,
        *,
        data: Dict[str, str],
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a multipart POST/PUT request.

        Text fields travel as file-less parts so the body stays
        ``multipart/form-data`` even when no file is attached. File values are
        ``(filename, bytes, mime)`` triples held in memory, so every retry
        sends the complete payload without rewinding handles.
        """
        parts = multipart_parts(data, files)
        return self._with_retries(
            f"{method} {url}",
            url,
            lambda: self.session.request(
                method,
                url,
                files=parts,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def delete(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """DELETE ``url``."""
        return self._with_retries(
            f"DELETE {url}",
            url,
            lambda: self.session.delete(
                url,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )


def multipart_parts(
    data: Dict[str, Any], files: Optional[Dict[str, Any]] = None
) -> List[Tuple[str, Any]]:
    """Flatten form fields and files into the ``files=`` list ``requests`` takes.

    List values repeat their key once per item, like a browser ``FormData``.
    """
    parts: List[Tuple[str, Any]] = []
    for key, value in data.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            parts.append((key, (None, str(item))))
    for key, triple in (files or {}).items():
        parts.append((key, triple))
    return parts


__all__ = ["AuthSession", "HttpConfig", "RetryingSession", "multipart_parts"]
