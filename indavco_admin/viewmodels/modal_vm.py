from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Union

from ..domain.entities import Entity, EntityId
from ..domain.resources import ResourceDescriptor
from .form_vm import FormVM

LOGGER = logging.getLogger(__name__)


class ModalMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


class ModalVM:
    """Create/edit modal state machine.

    ``Closed -> Open(Create)`` resets a fresh form, ``Closed -> Open(Edit)``
    hydrates it from the target entity. Cancel and a successful submit close
    the modal and drop the form; a failed submit keeps it open with ``error``
    set. Any other transition raises ``RuntimeError``.
    """

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        *,
        asset_origin: str = "",
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self.descriptor = descriptor
        self.asset_origin = asset_origin
        self.on_changed = on_changed
        self.mode = ModalMode.CLOSED
        self.target: Optional[Entity] = None
        self.form: Optional[FormVM] = None
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.mode is not ModalMode.CLOSED

    @property
    def target_id(self) -> Optional[EntityId]:
        return self.target.id if self.target is not None else None

    @property
    def title(self) -> str:
        if self.mode is ModalMode.EDIT:
            return f"Edit {self.descriptor.label}"
        return f"New {self.descriptor.label}"

    # ------------------------------------------------------------------
    def open_create(self) -> FormVM:
        self._require(False, "open_create")
        form = FormVM(self.descriptor, asset_origin=self.asset_origin)
        form.reset()
        self._enter(ModalMode.CREATE, None, form)
        return form

    def open_edit(self, entity: Entity) -> FormVM:
        self._require(False, "open_edit")
        form = FormVM(self.descriptor, asset_origin=self.asset_origin)
        form.hydrate(entity)
        self._enter(ModalMode.EDIT, entity, form)
        return form

    def cancel(self) -> None:
        self._require(True, "cancel")
        self._enter(ModalMode.CLOSED, None, None)

    def submit_succeeded(self) -> None:
        self._require(True, "submit_succeeded")
        self._enter(ModalMode.CLOSED, None, None)

    def submit_failed(self, err: Union[Exception, str]) -> None:
        """Stay open and surface ``err``; the form is left untouched."""
        self._require(True, "submit_failed")
        message = getattr(err, "message", None) or str(err)
        self.error = message
        LOGGER.debug("%s modal: submit failed (%s)", self.descriptor.key, message)
        self._notify()

    # ------------------------------------------------------------------
    def _require(self, open_: bool, action: str) -> None:
        if self.is_open != open_:
            state = "open" if self.is_open else "closed"
            raise RuntimeError(f"{action} not allowed while the modal is {state}")

    def _enter(self, mode: ModalMode, target: Optional[Entity], form: Optional[FormVM]) -> None:
        LOGGER.debug("%s modal: %s -> %s", self.descriptor.key, self.mode.value, mode.value)
        self.mode = mode
        self.target = target
        self.form = form
        self.error = None
        self._notify()

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed()
