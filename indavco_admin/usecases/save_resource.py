"""Create or update one entity from a normalized form payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from indavco_admin.domain.assets import AssetFile
from indavco_admin.domain.entities import Entity, EntityId
from indavco_admin.domain.errors import MutationError
from indavco_admin.domain.ports import Payload, ResourcePort
from indavco_admin.domain.resources import ResourceDescriptor
from indavco_admin.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class SaveResource:
    """Dispatch to ``create`` or ``update`` depending on ``target_id``.

    Failures surface as ``MutationError``: the backend's own message when it
    sent one, otherwise ``"Could not save the <resource>."``. The modal shows
    that message and keeps its form state.
    """

    port: ResourcePort
    descriptor: ResourceDescriptor

    async def __call__(self, payload: Payload, target_id: Optional[EntityId] = None) -> Entity:
        self._check_asset(payload, target_id)
        action = "create" if target_id is None else "update"
        try:
            if target_id is None:
                entity = await self.port.create(payload)
            else:
                entity = await self.port.update(target_id, payload)
        except Exception as exc:
            err = map_api_error(
                exc,
                default_code="SAVE_FAILED",
                default_message=self.fallback_message,
                error_type=MutationError,
                prefer_server_message=True,
            )
            LOGGER.error("%s %s failed: %s", action, self.descriptor.key, exc)
            raise err from exc
        LOGGER.debug("%s %s -> %s", action, self.descriptor.key, entity.id)
        return entity

    @property
    def fallback_message(self) -> str:
        return f"Could not save the {self.descriptor.label}."

    def _check_asset(self, payload: Payload, target_id: Optional[EntityId]) -> None:
        spec = self.descriptor.asset
        if spec is None or target_id is not None or not spec.required_on_create:
            return
        if not isinstance(payload.get(spec.name), AssetFile):
            label = spec.label or spec.name
            raise MutationError("ASSET_REQUIRED", f"{label} is required.")
