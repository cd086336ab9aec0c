from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass

from indavco_admin.domain.entities import EntityId
from indavco_admin.domain.errors import DeletionError
from indavco_admin.domain.ports import ConfirmFn, ResourcePort
from indavco_admin.domain.resources import ResourceDescriptor

LOGGER = logging.getLogger(__name__)


@dataclass
class DeleteResource:
    """Delete one entity after the user confirmed.

    Returns ``True`` when the delete was issued and succeeded, ``False`` when
    the confirmation was declined (the port is not touched then).
    """

    port: ResourcePort
    descriptor: ResourceDescriptor

    async def __call__(self, entity_id: EntityId, confirm: ConfirmFn) -> bool:
        answer = confirm(self.prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            LOGGER.debug("delete %s %s declined", self.descriptor.key, entity_id)
            return False
        try:
            await self.port.delete(entity_id)
        except Exception as exc:
            LOGGER.error("delete %s %s failed: %s", self.descriptor.key, entity_id, exc)
            raise DeletionError(
                "DELETE_FAILED",
                f"Could not delete the {self.descriptor.label}.",
                meta={"entity_id": entity_id},
            ) from exc
        return True

    @property
    def prompt(self) -> str:
        return f"Are you sure you want to delete this {self.descriptor.label}?"
