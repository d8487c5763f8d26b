from __future__ import annotations

import pytest

from kitinfo.adapters.typekit_mock import TypekitMock
from kitinfo.adapters.typekit_rest import TypekitRestAdapter
from kitinfo.app.controller import AppController
from kitinfo.app.settings import SettingsConfig
from kitinfo.domain.operations import Operation
from kitinfo.tests.helpers import FakeMenuIO


def test_controller_builds_rest_gateway_from_settings() -> None:
    settings = SettingsConfig(api_token="token", request_timeout_s=5, retries=0)
    controller = AppController(settings, FakeMenuIO())

    assert controller.ensure_ready() is True
    gateway = controller.gateway
    assert isinstance(gateway, TypekitRestAdapter)
    assert gateway.cfg.request_timeout_s == 5
    assert gateway.cfg.retries == 0
    assert gateway.session.api_token == "token"


def test_controller_without_token_is_not_ready() -> None:
    controller = AppController(SettingsConfig(), FakeMenuIO())

    assert controller.ensure_ready() is False
    with pytest.raises(RuntimeError):
        controller.build_flow()


def test_offline_controller_uses_mock_and_fresh_flows() -> None:
    io = FakeMenuIO()
    controller = AppController(SettingsConfig(), io, offline=True)

    first = controller.build_flow()
    second = controller.build_flow()

    assert isinstance(first.gateway, TypekitMock)
    assert first.gateway is second.gateway
    assert first.io is io
    assert first.queue is not second.queue
    assert second.queue.peek() is Operation.AUTHENTICATE
