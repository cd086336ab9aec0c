from __future__ import annotations

import json
import os
import tempfile
from typing import Any, Dict

from indavco_admin.domain.ports import StoragePort
from indavco_admin.viewmodels.settings_vm import default_settings_payload


class StorageLocal(StoragePort):
    """Local filesystem storage for console settings (JSON)."""

    _SETTINGS_FILE = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = os.path.join(self.root, self._SETTINGS_FILE)
        # write-then-replace so a crash never leaves a truncated file behind
        fd, tmp_path = tempfile.mkstemp(prefix="user_settings_", suffix=".tmp", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def load_user_settings(self) -> Dict[str, Any]:
        path = os.path.join(self.root, self._SETTINGS_FILE)
        if not os.path.exists(path):
            return default_settings_payload()
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object.")
        return data
