from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from indavco_admin.domain.entities import Entity


class StubPort:
    """ResourcePort double that records calls and can be told to fail."""

    def __init__(self, items: Optional[List[Entity]] = None) -> None:
        self.items: List[Entity] = list(items or [])
        self.calls: List[Tuple[str, Any]] = []
        self.fail_with: Dict[str, Exception] = {}
        self.created: Optional[Entity] = None

    def _maybe_fail(self, op: str) -> None:
        exc = self.fail_with.get(op)
        if exc is not None:
            raise exc

    async def get_all(self) -> List[Entity]:
        self.calls.append(("get_all", None))
        self._maybe_fail("get_all")
        return list(self.items)

    async def create(self, payload):
        self.calls.append(("create", dict(payload)))
        self._maybe_fail("create")
        return self.created if self.created is not None else self.items[0]

    async def update(self, entity_id, payload):
        self.calls.append(("update", (entity_id, dict(payload))))
        self._maybe_fail("update")
        return self.items[0]

    async def delete(self, entity_id) -> None:
        self.calls.append(("delete", entity_id))
        self._maybe_fail("delete")

    def ops(self) -> List[str]:
        return [name for name, _ in self.calls]


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        else:
            self.text = "" if payload is None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    """Stands in for ``RetryingSession``; records every request."""

    def __init__(self, *responses: FakeResponse) -> None:
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    def _next(self, **record: Any) -> FakeResponse:
        self.requests.append(record)
        return self.responses.pop(0)

    def get(self, url, *, params=None, timeout=None):
        return self._next(method="GET", url=url)

    def send_json(self, method, url, *, json_body=None, timeout=None):
        return self._next(method=method, url=url, json_body=json_body)

    def send_multipart(self, method, url, *, data, files=None, timeout=None):
        return self._next(method=method, url=url, data=data, files=files)

    def delete(self, url, *, timeout=None):
        return self._next(method="DELETE", url=url)


__all__ = ["FakeResponse", "FakeSession", "StubPort"]
