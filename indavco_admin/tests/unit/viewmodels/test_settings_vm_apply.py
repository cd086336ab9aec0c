from __future__ import annotations

import pytest

from indavco_admin.viewmodels.settings_vm import (
    DEFAULT_API_BASE_URL,
    DEFAULT_ASSET_ORIGIN,
    SettingsVM,
)


def test_defaults_point_at_content_backend(monkeypatch) -> None:
    for var in ("INDAVCO_LOG_LEVEL", "INDAVCO_ADMIN_LOG_LEVEL", "INDAVCO_DEBUG", "INDAVCO_ADMIN_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    vm = SettingsVM()
    assert vm.to_dict() == {
        "api_base_url": DEFAULT_API_BASE_URL,
        "asset_origin": DEFAULT_ASSET_ORIGIN,
        "request_timeout_s": 10,
        "retries": 2,
        "api_token": "",
        "debug_logging": False,
    }


def test_env_debug_flag_turns_on_debug_logging(monkeypatch) -> None:
    monkeypatch.setenv("INDAVCO_DEBUG", "1")
    assert SettingsVM().debug_logging is True


def test_apply_dict_coerces_values() -> None:
    vm = SettingsVM()
    vm.apply_dict(
        {
            "api_base_url": " http://localhost:5000/api/ ",
            "request_timeout_s": "30",
            "retries": 0,
            "api_token": " secret ",
            "debug_logging": "yes",
        }
    )

    assert vm.api_base_url == "http://localhost:5000/api"
    assert vm.request_timeout_s == 30
    assert vm.retries == 0
    assert vm.api_token == "secret"
    assert vm.debug_logging is True


def test_apply_dict_rejects_unknown_keys_and_bad_values() -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError):
        vm.apply_dict({"api_base_urls": {}})
    with pytest.raises(ValueError):
        vm.apply_dict({"retries": -1})
    with pytest.raises(ValueError):
        vm.apply_dict({"api_base_url": "ftp://host"})
    with pytest.raises(ValueError):
        vm.apply_dict({"request_timeout_s": True})


def test_cmd_save_hands_snapshot_to_callback() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)
    vm.api_token = "t"

    vm.cmd_save()

    assert saved[0]["api_token"] == "t"


def test_cmd_save_refuses_invalid_settings() -> None:
    vm = SettingsVM(on_save=lambda payload: None)
    vm.api_base_url = ""
    with pytest.raises(ValueError):
        vm.cmd_save()
