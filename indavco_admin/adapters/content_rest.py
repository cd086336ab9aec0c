"""REST adapter implementing ``ResourcePort`` for the content API.

One adapter instance serves one resource type; the descriptor supplies the
endpoint and the camelCase wire key of every field. Calls are made with the
blocking ``RetryingSession`` inside ``asyncio.to_thread`` so viewmodels can
await them without stalling the UI event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from indavco_admin.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    describe_failure,
    error_body,
    server_message,
    validation_hint,
)
from indavco_admin.adapters.http_client import RetryingSession
from indavco_admin.domain.assets import AssetFile
from indavco_admin.domain.entities import Entity, EntityId
from indavco_admin.domain.ports import Payload, ResourcePort
from indavco_admin.domain.resources import FieldSpec, ResourceDescriptor

LOGGER = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "on"}


class ContentRestAdapter(ResourcePort):
    """HTTP adapter for ``/<resource>`` and ``/<resource>/{id}`` endpoints."""

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        session: RetryingSession,
        *,
        base_url: str,
    ) -> None:
        if not base_url:
            raise ValueError("ContentRestAdapter requires an API base URL")
        self.descriptor = descriptor
        self.session = session
        self.base_url = base_url

    # ---------- ResourcePort ----------
    async def get_all(self) -> List[Entity]:
        return await asyncio.to_thread(self._get_all)

    async def create(self, payload: Payload) -> Entity:
        return await asyncio.to_thread(self._save, "POST", self._make_url(), payload)

    async def update(self, entity_id: EntityId, payload: Payload) -> Entity:
        return await asyncio.to_thread(self._save, "PUT", self._make_url(entity_id), payload)

    async def delete(self, entity_id: EntityId) -> None:
        await asyncio.to_thread(self._delete, entity_id)

    # ------------------------------------------------------------------
    def _get_all(self) -> List[Entity]:
        ctx = f"get_all[{self.descriptor.key}]"
        resp = self.session.get(self._make_url())
        self._ensure_ok(resp, ctx)
        payload = self._json(resp)
        raw_items = payload.get("data") if isinstance(payload, Mapping) else payload
        if not isinstance(raw_items, list):
            raise RuntimeError(f"{ctx}: invalid list payload, expected a 'data' array")
        entities = [parse_entity(self.descriptor, item) for item in raw_items if isinstance(item, Mapping)]
        LOGGER.debug("%s -> %d item(s)", ctx, len(entities))
        return entities

    def _save(self, method: str, url: str, payload: Payload) -> Entity:
        ctx = f"{'create' if method == 'POST' else 'update'}[{self.descriptor.key}]"
        if self.descriptor.multipart:
            data, files = to_multipart(self.descriptor, payload)
            resp = self.session.send_multipart(method, url, data=data, files=files)
        else:
            resp = self.session.send_json(method, url, json_body=to_wire(self.descriptor, payload))
        self._ensure_ok(resp, ctx)
        body = self._json(resp)
        raw = body.get("data") if isinstance(body, Mapping) and isinstance(body.get("data"), Mapping) else body
        if not isinstance(raw, Mapping):
            raise RuntimeError(f"{ctx}: invalid entity payload, expected an object")
        return parse_entity(self.descriptor, raw)

    def _delete(self, entity_id: EntityId) -> None:
        resp = self.session.delete(self._make_url(entity_id))
        self._ensure_ok(resp, f"delete[{self.descriptor.key}]")

    def _make_url(self, entity_id: Optional[EntityId] = None) -> str:
        """Build endpoint URL from the API base URL and resource endpoint."""
        base = self.base_url[:-1] if self.base_url.endswith("/") else self.base_url
        url = f"{base}{self.descriptor.endpoint}"
        if entity_id is not None:
            normalized = str(entity_id).strip()
            if not normalized:
                raise ValueError("entity id is required")
            url = f"{url}/{normalized}"
        return url

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses."""
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = error_body(resp)
        message = describe_failure(ctx, status, payload)
        kwargs: Dict[str, Any] = {
            "status": status,
            "hint": validation_hint(payload),
            "server_message": server_message(payload),
            "payload": payload,
            "context": ctx,
        }
        if 400 <= status < 500:
            raise ApiClientError(message, **kwargs)
        if 500 <= status < 600:
            raise ApiServerError(message, **kwargs)
        raise ApiError(message, **kwargs)

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        """Parse response JSON; an empty body is returned as ``{}``."""
        if not getattr(resp, "text", "x"):
            return {}
        try:
            return resp.json()
        except Exception:
            snippet = getattr(resp, "text", "")[:400]
            raise RuntimeError(f"Invalid JSON response: {snippet}")


# ---------------------------------------------------------------------------
# Wire mapping
# ---------------------------------------------------------------------------
def parse_entity(descriptor: ResourceDescriptor, raw: Mapping[str, Any]) -> Entity:
    """Map one camelCase API object onto the descriptor's entity dataclass."""
    entity_id = raw.get("_id") or raw.get("id")
    if entity_id is None or not str(entity_id).strip():
        raise RuntimeError(f"Invalid {descriptor.key} payload: id missing")

    values: Dict[str, Any] = {}
    for spec in (*descriptor.fields, *descriptor.readonly):
        values[spec.name] = _coerce_wire(spec, raw.get(spec.wire))
    if descriptor.slug is not None:
        values[descriptor.slug.name] = _as_text(raw.get(descriptor.slug.wire), "")
    if descriptor.asset is not None:
        values[descriptor.asset.name] = _as_text(raw.get(descriptor.asset.wire), "")
    return descriptor.entity_type(id=str(entity_id), **values)


def to_wire(descriptor: ResourceDescriptor, payload: Payload) -> Dict[str, Any]:
    """Rename payload keys to wire keys for a JSON body."""
    body: Dict[str, Any] = {}
    for spec in descriptor.fields:
        if spec.name in payload:
            value = payload[spec.name]
            body[spec.wire] = list(value) if spec.is_list else value
    if descriptor.slug is not None and descriptor.slug.name in payload:
        body[descriptor.slug.wire] = payload[descriptor.slug.name]
    return body


def to_multipart(
    descriptor: ResourceDescriptor, payload: Payload
) -> Tuple[Dict[str, Any], Dict[str, Tuple[str, bytes, str]]]:
    """Split a payload into form fields and an optional file part.

    Scalars are sent as the text a browser form would produce; the asset is
    attached only when a new file was chosen, so an edit without one keeps the
    stored asset on the server.
    """
    data: Dict[str, Any] = {}
    for wire, value in to_wire(descriptor, payload).items():
        if isinstance(value, bool):
            data[wire] = "true" if value else "false"
        elif isinstance(value, list):
            data[wire] = [str(item) for item in value]
        else:
            data[wire] = "" if value is None else str(value)

    files: Dict[str, Tuple[str, bytes, str]] = {}
    if descriptor.asset is not None:
        asset = payload.get(descriptor.asset.name)
        if isinstance(asset, AssetFile):
            files[descriptor.asset.wire] = asset.as_multipart()
    return data, files


def _coerce_wire(spec: FieldSpec, value: Any) -> Any:
    if spec.kind == "list":
        return _as_list(value)
    if spec.kind == "bool":
        return _as_bool(value, bool(spec.default))
    if spec.kind == "int":
        return int(_as_number(value, spec.default))
    if spec.kind == "float":
        return float(_as_number(value, spec.default))
    if spec.kind == "date":
        return _as_text(value, "").split("T")[0]
    return _as_text(value, spec.default if isinstance(spec.default, str) else "")


def _as_text(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_TOKENS
    return bool(value)


def _as_number(value: Any, default: Any) -> Any:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def _as_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


__all__ = ["ContentRestAdapter", "parse_entity", "to_multipart", "to_wire"]
