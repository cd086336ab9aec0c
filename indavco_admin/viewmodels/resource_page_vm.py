"""Page-level composition of store, modal and mutations for one resource.

A view binds to :class:`ResourcePageVM` only: it reads ``items`` and
``is_loading`` and wires four callbacks (``open_create``, ``open_edit``,
``submit`` and ``delete``). Everything else (form editing, asset selection)
goes through ``modal.form``.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..domain.entities import Entity, EntityId
from ..domain.errors import DeletionError, MutationError
from ..domain.ports import ConfirmFn, ResourcePort
from ..domain.resources import ResourceDescriptor
from ..usecases.delete_resource import DeleteResource
from ..usecases.load_resources import LoadResources
from ..usecases.save_resource import SaveResource
from .form_vm import FormVM
from .modal_vm import ModalVM
from .resource_store_vm import ResourceStoreVM

LOGGER = logging.getLogger(__name__)


def _decline(_prompt: str) -> bool:
    return False


class ResourcePageVM:
    def __init__(
        self,
        descriptor: ResourceDescriptor,
        port: ResourcePort,
        *,
        asset_origin: str = "",
        confirm: Optional[ConfirmFn] = None,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self.descriptor = descriptor
        self.on_changed = on_changed
        self.confirm: ConfirmFn = confirm or _decline
        self.store = ResourceStoreVM(LoadResources(port, descriptor), on_changed=self._notify)
        self.modal = ModalVM(descriptor, asset_origin=asset_origin, on_changed=self._notify)
        self.uc_save = SaveResource(port, descriptor)
        self.uc_delete = DeleteResource(port, descriptor)
        self.notice: Optional[str] = None
        self.is_submitting = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def items(self) -> List[Entity]:
        return self.store.items

    @property
    def is_loading(self) -> bool:
        return self.store.is_loading

    @property
    def form(self) -> Optional[FormVM]:
        return self.modal.form

    async def mount(self) -> None:
        await self.store.reload()

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def open_create(self) -> FormVM:
        return self.modal.open_create()

    def open_edit(self, entity: Entity) -> FormVM:
        return self.modal.open_edit(entity)

    def cancel(self) -> None:
        self.modal.cancel()

    async def submit(self) -> bool:
        """Save the open form; close and reload on success.

        Returns ``False`` when the save failed; the modal then stays open with
        ``modal.error`` set. A modal closed while the request was in flight is
        left alone.
        """
        form = self.modal.form
        if form is None:
            raise RuntimeError("submit requires an open modal")
        payload = form.normalize()
        self.is_submitting = True
        self._notify()
        try:
            await self.uc_save(payload, self.modal.target_id)
        except MutationError as err:
            if self.modal.form is form:
                self.modal.submit_failed(err)
            return False
        finally:
            self.is_submitting = False
        if self.modal.form is form:
            self.modal.submit_succeeded()
        await self.store.reload()
        return True

    async def delete(self, entity_id: EntityId, confirm: Optional[ConfirmFn] = None) -> bool:
        """Delete after confirmation; the list only changes through a reload."""
        self.notice = None
        try:
            deleted = await self.uc_delete(entity_id, confirm or self.confirm)
        except DeletionError as err:
            self.notice = err.message
            self._notify()
            return False
        if deleted:
            await self.store.reload()
        return deleted

    def dismiss_notice(self) -> None:
        self.notice = None
        self._notify()

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed()
