"""Root logger setup for the console tool.

The console owns stdout for menus, so log records stay at WARNING unless the
user asks for more with ``--log-level`` or the environment:

- ``KITINFO_LOG_LEVEL``: level name or number, wins over the CLI flag.
- ``KITINFO_DEBUG``: any truthy value selects DEBUG.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Mapping, Optional

LOG_LEVEL_ENV = "KITINFO_LOG_LEVEL"
DEBUG_ENV = "KITINFO_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = {"1", "true", "yes", "on"}


def parse_level(value: str) -> int:
    """Turn ``"info"``, ``"WARN"`` or ``"15"`` into a logging level.

    Used as the ``type=`` of the ``--log-level`` option, so bad names are
    reported by argparse.
    """
    text = str(value).strip().upper()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text)
    if isinstance(level, int):
        return level
    raise argparse.ArgumentTypeError(f"unknown log level: {value!r}")


def env_level(env: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level requested through the environment, if any.

    An unparsable ``KITINFO_LOG_LEVEL`` is ignored.
    """
    env = os.environ if env is None else env
    raw = (env.get(LOG_LEVEL_ENV) or "").strip()
    if raw:
        try:
            return parse_level(raw)
        except argparse.ArgumentTypeError:
            pass
    if (env.get(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(
    default_level: int = logging.WARNING,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """Configure the root logger and return the effective level."""
    requested = env_level(env)
    effective = default_level if requested is None else requested
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    return effective
