"""Console settings state: API endpoint, asset origin, HTTP tuning, token.

Values arrive from the settings JSON file, the settings form and the
environment; every path goes through the same per-key coercion so the
controller can trust what it reads.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_forces_debug

DEFAULT_API_BASE_URL = "https://indavco-backend.onrender.com/api"
DEFAULT_ASSET_ORIGIN = "https://indavco-backend.onrender.com"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass
class SettingsConfig:
    """Connection settings handed to the HTTP layer."""

    api_base_url: str = DEFAULT_API_BASE_URL
    asset_origin: str = DEFAULT_ASSET_ORIGIN
    request_timeout_s: int = 10
    retries: int = 2


def _url(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string URL.")
    url = value.strip().rstrip("/")
    if url and not url.startswith(("http://", "https://")):
        raise ValueError(f"{key} must start with http:// or https://.")
    return url


def _whole_number(minimum: int) -> Callable[[str, Any], int]:
    def coerce(key: str, value: Any) -> int:
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"{key} must be an integer.")
        try:
            number = int(value.strip()) if isinstance(value, str) else int(value)
        except (OverflowError, ValueError) as exc:
            raise ValueError(f"{key} must be an integer.") from exc
        if number < minimum:
            raise ValueError(f"{key} must be >= {minimum}.")
        return number

    return coerce


_CONFIG_RULES: Dict[str, Callable[[str, Any], Any]] = {
    "api_base_url": _url,
    "asset_origin": _url,
    "request_timeout_s": _whole_number(1),
    "retries": _whole_number(0),
}


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class SettingsVM:
    """Holds console settings and validates them; persistence is delegated to ``on_save``."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.api_token: str = ""
        self.debug_logging: bool = env_forces_debug()

    def _update(self, key: str, value: Any) -> None:
        self.config = replace(self.config, **{key: _CONFIG_RULES[key](key, value)})

    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self._update("api_base_url", value)

    @property
    def asset_origin(self) -> str:
        return self.config.asset_origin

    @asset_origin.setter
    def asset_origin(self, value: str) -> None:
        self._update("asset_origin", value)

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: int) -> None:
        self._update("request_timeout_s", value)

    @property
    def retries(self) -> int:
        return self.config.retries

    @retries.setter
    def retries(self, value: int) -> None:
        self._update("retries", value)

    def is_valid(self) -> bool:
        cfg = self.config
        return bool(cfg.api_base_url) and cfg.request_timeout_s >= 1 and cfg.retries >= 0

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a flat settings mapping (file contents or form values).

        Unknown keys are rejected outright. Nothing is applied when any
        value fails coercion.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        allowed = {*_CONFIG_RULES, "api_token", "debug_logging"}
        unknown = sorted(str(key) for key in payload if key not in allowed)
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(unknown)}")

        changes = {key: rule(key, payload[key]) for key, rule in _CONFIG_RULES.items() if key in payload}
        if changes:
            self.config = replace(self.config, **changes)
        if "api_token" in payload:
            token = payload["api_token"]
            self.api_token = "" if token is None else str(token).strip()
        if "debug_logging" in payload:
            self.debug_logging = _flag(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["api_token"] = self.api_token
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())


def default_settings_payload() -> dict:
    return SettingsVM().to_dict()


__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_ASSET_ORIGIN",
    "SettingsConfig",
    "SettingsVM",
    "default_settings_payload",
]
