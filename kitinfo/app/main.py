# kitinfo/app/main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from ..domain.errors import AuthenticationFailed, SettingsError
from ..domain.ports import MenuIOPort
from ..usecases.menu_control_flow import MenuControlFlow
from ..utils import logging as logging_utils
from .console_io import ConsoleMenuIO
from .controller import AppController
from .settings import default_storage, load_settings

EXIT_OK = 0
EXIT_AUTH_FAILED = 1
EXIT_CONFIG_ERROR = 2

_log = logging.getLogger(__name__)


def run_session(flow: MenuControlFlow, io: MenuIOPort) -> int:
    """Run one interactive session and return the process exit status."""
    try:
        flow.run()
    except AuthenticationFailed as exc:
        _log.info("authentication failed: %s", exc)
        io.auth_failed()
        return EXIT_AUTH_FAILED
    return EXIT_OK


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI args for the console runtime."""
    parser = argparse.ArgumentParser(
        prog="kitinfo",
        description="Interactively list, view, create, update, and delete Typekit kits.",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="use an in-memory kit store instead of the Typekit API",
    )
    parser.add_argument("--settings-dir", default=None, help="directory holding settings.json")
    parser.add_argument(
        "--log-level",
        type=logging_utils.parse_level,
        default=logging.WARNING,
        help="log level name or number (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint for the console tool."""
    args = _parse_args(argv)
    logging_utils.configure_root(args.log_level)
    io = ConsoleMenuIO()

    try:
        settings = load_settings(default_storage(args.settings_dir))
    except SettingsError as exc:
        io.error(f"Invalid setting {exc}")
        return EXIT_CONFIG_ERROR

    controller = AppController(settings, io, offline=args.offline)
    if not controller.ensure_ready():
        io.error("No API token configured.")
        io.error("Set KITINFO_API_TOKEN or add \"api_token\" to settings.json.")
        return EXIT_CONFIG_ERROR

    return run_session(controller.build_flow(), io)


if __name__ == "__main__":
    sys.exit(main())
