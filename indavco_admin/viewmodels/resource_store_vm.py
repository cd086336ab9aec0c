from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from ..domain.entities import Entity
from ..domain.errors import ListLoadError

LOGGER = logging.getLogger(__name__)

ListLoader = Callable[[], Awaitable[List[Entity]]]


class ResourceStoreVM:
    """Displayed list of one resource type.

    ``items`` is written by :meth:`reload` only. Reloads are numbered in the
    order they are issued; a result is applied unless a later-issued reload
    has already been applied, so a late older response never overwrites a
    newer one and a failed newer reload leaves the newest fetched list.
    """

    def __init__(self, load: ListLoader, *, on_changed: Optional[Callable[[], None]] = None) -> None:
        self._load = load
        self.on_changed = on_changed
        self.items: List[Entity] = []
        self.is_loading = True
        self._issued = 0
        self._applied = 0

    async def reload(self) -> bool:
        """Fetch the list; return ``True`` when this call updated the store.

        On failure the current items stay visible and the error is only
        logged. ``is_loading`` becomes ``False`` once a reload settles.
        """
        self._issued += 1
        token = self._issued
        try:
            items = await self._load()
        except ListLoadError as err:
            if token != self._issued:
                LOGGER.debug("stale reload #%d failed, ignored", token)
                return False
            LOGGER.warning("List load failed [%s]: %s", err.code, err.message)
            self.is_loading = False
            self._notify()
            return False
        if token < self._applied:
            LOGGER.debug("stale reload #%d discarded (applied #%d)", token, self._applied)
            return False
        self._applied = token
        self.items = list(items)
        self.is_loading = False
        self._notify()
        return True

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed()
