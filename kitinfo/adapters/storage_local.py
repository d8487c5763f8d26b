from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

from kitinfo.domain.errors import SettingsError

_log = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


class StorageLocal:
    """Read-only access to the user's ``settings.json``."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILE)

    def load_user_prefs(self) -> Dict[str, Any]:
        """Return the stored preferences, or ``{}`` when there is no file.

        Raises:
            SettingsError: The file exists but is not valid JSON.
        """
        path = self.settings_path
        if not os.path.exists(path):
            return {}
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except ValueError as exc:
                raise SettingsError(SETTINGS_FILE, f"not valid JSON ({exc})") from exc
        if not isinstance(data, dict):
            _log.warning("Ignoring %s: expected a JSON object", path)
            return {}
        return data
