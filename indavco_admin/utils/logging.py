"""Root logger setup for the console.

Environment overrides, checked in order:
  - INDAVCO_LOG_LEVEL / INDAVCO_ADMIN_LOG_LEVEL: explicit level name or number
  - INDAVCO_DEBUG / INDAVCO_ADMIN_DEBUG: truthy value means DEBUG
An override always beats the "debug logging" checkbox in the settings page.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_LEVEL_VARS = ("INDAVCO_LOG_LEVEL", "INDAVCO_ADMIN_LOG_LEVEL")
_DEBUG_VARS = ("INDAVCO_DEBUG", "INDAVCO_ADMIN_DEBUG")
# connection-pool and reload chatter
_QUIET = ("urllib3", "httpx", "watchfiles")


def _parse_level(text: Union[int, str, None], fallback: int = logging.INFO) -> int:
    if isinstance(text, int):
        return text
    text = (text or "").strip()
    if text.isdigit():
        return int(text)
    named = logging.getLevelName(text.upper()) if text else None
    return named if isinstance(named, int) else fallback


def env_level() -> Optional[int]:
    """Level demanded by the environment, or ``None`` when nothing is set."""
    for var in _LEVEL_VARS:
        raw = os.getenv(var)
        if raw:
            return _parse_level(raw)
    for var in _DEBUG_VARS:
        if (os.getenv(var) or "").strip().lower() in {"1", "true", "yes", "on"}:
            return logging.DEBUG
    return None


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install a compact stream handler once and set the root level."""
    forced = env_level()
    level = forced if forced is not None else _parse_level(default_level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    for name in _QUIET:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    return level


def apply_console_preferences(debug_enabled: bool) -> int:
    """Re-level the root logger after the settings page is saved; returns the level used."""
    forced = env_level()
    if forced is None:
        forced = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(forced)
    return forced


def env_forces_debug() -> bool:
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG
