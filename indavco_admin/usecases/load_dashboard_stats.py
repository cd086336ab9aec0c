from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from indavco_admin.domain.ports import ResourcePort

LOGGER = logging.getLogger(__name__)


@dataclass
class LoadDashboardStats:
    """Count the entities of every resource concurrently.

    ``ports`` maps resource keys to their port. A resource whose list cannot
    be fetched is reported as ``0`` and logged; one failure never hides the
    other counts.
    """

    ports: Mapping[str, ResourcePort]

    async def __call__(self) -> Dict[str, int]:
        keys = list(self.ports.keys())
        results = await asyncio.gather(
            *(self.ports[key].get_all() for key in keys),
            return_exceptions=True,
        )
        counts: Dict[str, int] = {}
        for key, result in zip(keys, results):
            if isinstance(result, BaseException):
                LOGGER.warning("Dashboard count for %s unavailable: %s", key, result)
                counts[key] = 0
            else:
                counts[key] = len(result)
        return counts
