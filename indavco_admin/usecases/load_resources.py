from __future__ import annotations

from dataclasses import dataclass
from typing import List

from indavco_admin.domain.entities import Entity
from indavco_admin.domain.errors import ListLoadError
from indavco_admin.domain.ports import ResourcePort
from indavco_admin.domain.resources import ResourceDescriptor
from indavco_admin.usecases.error_mapping import map_api_error


@dataclass
class LoadResources:
    """Fetch the complete list of one resource type."""

    port: ResourcePort
    descriptor: ResourceDescriptor

    async def __call__(self) -> List[Entity]:
        try:
            items = await self.port.get_all()
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="LIST_LOAD_FAILED",
                default_message=f"Could not load {self.descriptor.key}.",
                error_type=ListLoadError,
            ) from exc
        return list(items or [])
