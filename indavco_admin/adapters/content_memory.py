from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List
from uuid import uuid4

from indavco_admin.domain.assets import AssetFile
from indavco_admin.domain.entities import Entity, EntityId
from indavco_admin.domain.ports import Payload, ResourcePort
from indavco_admin.domain.resources import ResourceDescriptor


@dataclass
class ContentMemoryAdapter(ResourcePort):
    """Offline substitute for ``ContentRestAdapter`` with deterministic behavior.

    Entities live in insertion order; ids are random hex strings. Uploaded
    assets are "stored" under ``/uploads/<resource>/<filename>``.
    """

    descriptor: ResourceDescriptor
    seed: Iterable[Entity] = ()
    latency_s: float = 0.0
    _items: Dict[EntityId, Entity] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        for entity in self.seed:
            self._items[entity.id] = entity

    # ---------- ResourcePort ----------
    async def get_all(self) -> List[Entity]:
        await self._pause()
        return list(self._items.values())

    async def create(self, payload: Payload) -> Entity:
        await self._pause()
        entity = self.descriptor.entity_type(id=uuid4().hex[:24], **self._values(payload))
        self._items[entity.id] = entity
        return entity

    async def update(self, entity_id: EntityId, payload: Payload) -> Entity:
        await self._pause()
        current = self._items.get(entity_id)
        if current is None:
            raise KeyError(f"{self.descriptor.key}: no entity with id '{entity_id}'")
        updated = replace(current, **self._values(payload))
        self._items[entity_id] = updated
        return updated

    async def delete(self, entity_id: EntityId) -> None:
        await self._pause()
        if self._items.pop(entity_id, None) is None:
            raise KeyError(f"{self.descriptor.key}: no entity with id '{entity_id}'")

    # ------------------------------------------------------------------
    def _values(self, payload: Payload) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for spec in self.descriptor.fields:
            if spec.name in payload:
                value = payload[spec.name]
                values[spec.name] = tuple(value) if spec.is_list else value
        slug = self.descriptor.slug
        if slug is not None and slug.name in payload:
            values[slug.name] = payload[slug.name]
        asset_spec = self.descriptor.asset
        if asset_spec is not None:
            asset = payload.get(asset_spec.name)
            if isinstance(asset, AssetFile):
                values[asset_spec.name] = f"/uploads/{self.descriptor.key}/{asset.filename}"
        return values

    async def _pause(self) -> None:
        if self.latency_s > 0:
            await asyncio.sleep(self.latency_s)
