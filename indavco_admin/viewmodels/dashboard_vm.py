from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Optional

StatsLoader = Callable[[], Awaitable[Dict[str, int]]]


@dataclass
class DashboardVM:
    """Entity counts per resource for the landing page."""

    load_stats: StatsLoader
    on_changed: Optional[Callable[[], None]] = None
    counts: Dict[str, int] = field(default_factory=dict)
    is_loading: bool = True

    async def refresh(self) -> Dict[str, int]:
        self.counts = dict(await self.load_stats())
        self.is_loading = False
        if self.on_changed:
            self.on_changed()
        return self.counts

    def count(self, key: str) -> int:
        return int(self.counts.get(key, 0))
