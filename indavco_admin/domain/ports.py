from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Protocol, Union

from .entities import Entity, EntityId

Payload = Mapping[str, Any]
ConfirmFn = Callable[[str], Union[bool, Awaitable[bool]]]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta


# ---- Ports (Hexagonal boundaries) ----
class ResourcePort(Protocol):
    """CRUD operations for one resource type against the content API.

    Payloads are the normalized form projection keyed by entity attribute
    names; adapters own the wire mapping (JSON or multipart).
    """

    async def get_all(self) -> List[Entity]: ...
    async def create(self, payload: Payload) -> Entity: ...
    async def update(self, entity_id: EntityId, payload: Payload) -> Entity: ...
    async def delete(self, entity_id: EntityId) -> None: ...


class StoragePort(Protocol):
    """Persistence for console settings."""

    def save_user_settings(self, payload: Dict[str, Any]) -> None: ...
    def load_user_settings(self) -> Dict[str, Any]: ...
