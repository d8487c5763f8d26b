from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from ..adapters.storage_local import StorageLocal
from ..adapters.typekit_rest import DEFAULT_BASE_URL
from ..domain.errors import SettingsError

DEFAULT_SETTINGS_DIR = os.path.join("~", ".kitinfo")

_TOKEN_ENV_VARS = ("KITINFO_API_TOKEN", "TYPEKIT_API_TOKEN")
_ENV_KEYS = {
    "KITINFO_API_URL": "api_base_url",
    "KITINFO_TIMEOUT_S": "request_timeout_s",
    "KITINFO_RETRIES": "retries",
}


@dataclass
class SettingsConfig:
    """Typed runtime settings; persisted as ``settings.json`` via StorageLocal."""

    api_base_url: str = DEFAULT_BASE_URL
    api_token: str = ""
    request_timeout_s: int = 10
    retries: int = 2

    def public_dict(self) -> Dict[str, Any]:
        """Settings without the token, safe for logs."""
        data = asdict(self)
        data["api_token"] = "***" if self.api_token else ""
        return data


def _coerce(key: str, value: Any) -> Any:
    if key in ("request_timeout_s", "retries"):
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            raise SettingsError(key, f"expected an integer, got {value!r}") from None
        if number < 0 or (key == "request_timeout_s" and number == 0):
            raise SettingsError(key, f"out of range: {number}")
        return number
    return str(value).strip()


def _overrides(source: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(SettingsConfig)}
    return {
        key: _coerce(key, value)
        for key, value in source.items()
        if key in known and value not in (None, "")
    }


def load_settings(
    storage: Optional[StorageLocal] = None,
    env: Optional[Mapping[str, str]] = None,
) -> SettingsConfig:
    """Build settings from defaults, ``settings.json``, then environment.

    Raises:
        SettingsError: A numeric setting is not a valid integer.
    """
    env = os.environ if env is None else env
    config = SettingsConfig()
    if storage is not None:
        config = replace(config, **_overrides(storage.load_user_prefs()))

    from_env: Dict[str, Any] = {
        attr: env[var] for var, attr in _ENV_KEYS.items() if env.get(var)
    }
    for var in _TOKEN_ENV_VARS:
        if env.get(var):
            from_env["api_token"] = env[var]
            break
    return replace(config, **_overrides(from_env))


def default_storage(settings_dir: Optional[str] = None) -> StorageLocal:
    return StorageLocal(os.path.expanduser(settings_dir or DEFAULT_SETTINGS_DIR))


__all__ = ["SettingsConfig", "default_storage", "load_settings"]
