"""Adapter and flow wiring for the console runtime.

This module owns lazy construction of the kit gateway and the menu flow from
:class:`kitinfo.app.settings.SettingsConfig`. It is invoked by
``kitinfo/app/main.py`` before a session starts.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.typekit_mock import TypekitMock
from ..adapters.typekit_rest import TypekitRestAdapter
from ..domain.ports import KitPort, MenuIOPort
from ..usecases.menu_control_flow import MenuControlFlow
from .settings import SettingsConfig

_log = logging.getLogger(__name__)


class AppController:
    """Create and cache the runtime gateway and menu flow from settings.

    Call chain:
        ``kitinfo.app.main.main`` creates one instance, checks
        ``ensure_ready`` and hands ``build_flow()`` to ``run_session``.
    """

    def __init__(
        self,
        settings: SettingsConfig,
        io: MenuIOPort,
        *,
        offline: bool = False,
    ) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings: API URL, token, and timeout preferences.
            io: Interaction surface shared by every flow built here.
            offline: Use the in-memory gateway instead of the REST API.
        """
        self.settings = settings
        self.io = io
        self.offline = offline
        self._gateway: Optional[KitPort] = None

    @property
    def gateway(self) -> Optional[KitPort]:
        """Return the cached gateway, if one has been built."""
        return self._gateway

    def ensure_ready(self) -> bool:
        """Build the gateway when settings allow it.

        Returns:
            ``True`` when a gateway is available, ``False`` when the API token
            is missing and the controller is not offline.
        """
        if self._gateway is not None:
            return True
        if self.offline:
            self._gateway = TypekitMock.with_example_kit()
            _log.info("using offline kit gateway")
            return True
        if not self.settings.api_token:
            return False
        self._gateway = TypekitRestAdapter(
            self.settings.api_token,
            base_url=self.settings.api_base_url,
            request_timeout_s=self.settings.request_timeout_s,
            retries=self.settings.retries,
        )
        _log.debug("gateway configured: %s", self.settings.public_dict())
        return True

    def build_flow(self) -> MenuControlFlow:
        """Return a fresh flow starting from the startup sequence.

        Raises:
            RuntimeError: If ``ensure_ready`` has not produced a gateway.
        """
        if not self.ensure_ready() or self._gateway is None:
            raise RuntimeError("No kit gateway configured; set an API token first.")
        return MenuControlFlow(self._gateway, self.io)
