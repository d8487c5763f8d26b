from __future__ import annotations

import pytest

from kitinfo.adapters.typekit_mock import EXAMPLE_KIT, NOT_FOUND_ERROR, TypekitMock
from kitinfo.domain.errors import AuthenticationFailed
from kitinfo.domain.models import KIT_ID_KEY, Kit
from kitinfo.domain.operations import Operation
from kitinfo.tests.helpers import FakeMenuIO
from kitinfo.usecases.menu_control_flow import MenuControlFlow

FAKE_ID = EXAMPLE_KIT.id
FAKE_FIELDS = {"name": "Example", "domains": ["example.com"]}


def _flow(gateway: TypekitMock | None = None, **io_script) -> MenuControlFlow:
    return MenuControlFlow(gateway or TypekitMock.with_example_kit(), FakeMenuIO(**io_script))


def test_main_menu_pushes_chosen_operation() -> None:
    for choice in (Operation.LIST_AND_CHOOSE, Operation.COLLECT_FIELDS, Operation.QUIT):
        flow = _flow(choices=[choice])

        assert flow.main_menu() is None
        assert flow.queue.peek() is choice


def test_list_and_choose_returns_selected_id_and_schedules_action() -> None:
    flow = _flow(choices=["Example"])

    assert flow.list_and_choose() == FAKE_ID
    assert flow.queue.peek() is Operation.CHOOSE_ACTION
    prompt, options = flow.io.prompts[0]
    assert prompt == "Select a Kit:"
    assert options == {"Example": FAKE_ID}


def test_list_and_choose_empty_list_offers_create() -> None:
    flow = _flow(TypekitMock.with_example_kit(empty=True), confirms=[True])

    assert flow.list_and_choose() is None
    assert flow.queue.peek() is Operation.COLLECT_FIELDS


def test_list_and_choose_empty_list_declined_quits() -> None:
    flow = _flow(TypekitMock.with_example_kit(empty=True), confirms=[False])

    assert flow.list_and_choose() is None
    assert flow.queue.peek() is Operation.QUIT


def test_list_and_choose_item_error_reports_and_quits() -> None:
    flow = _flow(TypekitMock.with_example_kit(not_found_error=True))

    assert flow.list_and_choose() is None
    assert flow.queue.peek() is Operation.QUIT
    assert ("show_error", NOT_FOUND_ERROR) in flow.io.events
    assert flow.io.prompts == []


def test_list_and_choose_malformed_listing_warns_and_quits() -> None:
    flow = _flow(TypekitMock.with_example_kit(malformed=True))

    assert flow.list_and_choose() is None
    assert flow.queue.peek() is Operation.QUIT
    assert flow.io.kinds() == ["unexpected_response"]


def test_list_and_choose_keeps_duplicate_names_distinct_and_ordered() -> None:
    gateway = TypekitMock(
        kits={
            "k1": Kit(id="k1", name="Shared"),
            "k2": Kit(id="k2", name="Shared"),
            "k3": Kit(id="k3", name="Other"),
        }
    )
    flow = _flow(gateway, choices=["Shared (k2)"])

    assert flow.list_and_choose() == "k2"
    _, options = flow.io.prompts[0]
    assert list(options.items()) == [
        ("Shared", "k1"),
        ("Shared (k2)", "k2"),
        ("Other", "k3"),
    ]


def test_choose_action_view_schedules_after_view_and_passes_id() -> None:
    flow = _flow(choices=[Operation.VIEW])

    assert flow.choose_action(FAKE_ID) == FAKE_ID
    assert list(flow.queue)[:2] == [Operation.VIEW, Operation.AFTER_VIEW]


def test_choose_action_delete_and_update() -> None:
    flow = _flow(choices=[Operation.DELETE])
    assert flow.choose_action(FAKE_ID) == FAKE_ID
    assert flow.queue.peek() is Operation.DELETE
    assert Operation.AFTER_VIEW not in list(flow.queue)

    flow = _flow(choices=[Operation.COLLECT_FIELDS])
    assert flow.choose_action() is None
    assert flow.queue.peek() is Operation.COLLECT_FIELDS


def test_after_view_only_pushes_on_yes() -> None:
    flow = _flow(confirms=[True])
    assert flow.after_view(FAKE_ID) == FAKE_ID
    assert flow.queue.peek() is Operation.COLLECT_FIELDS

    flow = _flow(confirms=[False])
    assert flow.after_view(FAKE_ID) == FAKE_ID
    assert flow.queue.peek() is Operation.AUTHENTICATE


def test_collect_fields_without_id_is_create() -> None:
    flow = _flow(fields=[FAKE_FIELDS])

    result = flow.collect_fields()

    assert result == {**FAKE_FIELDS, KIT_ID_KEY: None}
    assert flow.queue.peek() is Operation.SAVE
    assert Operation.AFTER_VIEW not in list(flow.queue)


def test_collect_fields_with_id_schedules_after_view_after_save() -> None:
    flow = _flow(fields=[FAKE_FIELDS])

    result = flow.collect_fields(FAKE_ID)

    assert result == {**FAKE_FIELDS, KIT_ID_KEY: FAKE_ID}
    assert list(flow.queue)[:2] == [Operation.SAVE, Operation.AFTER_VIEW]


def test_save_create_sends_exactly_entered_fields() -> None:
    gateway = TypekitMock()
    flow = _flow(gateway)

    assert flow.save({**FAKE_FIELDS, KIT_ID_KEY: None}) is None
    assert gateway.calls == [("save_kit", FAKE_FIELDS, None)]
    kind, response = flow.io.events[0]
    assert kind == "show_kit"
    assert response.value["name"] == "Example"


def test_save_update_returns_id() -> None:
    gateway = TypekitMock.with_example_kit()
    flow = _flow(gateway)

    assert flow.save({"name": "Renamed", KIT_ID_KEY: FAKE_ID}) == FAKE_ID
    assert gateway.calls == [("save_kit", {"name": "Renamed"}, FAKE_ID)]
    assert gateway.kits[FAKE_ID].name == "Renamed"


def test_view_and_delete_display_results() -> None:
    gateway = TypekitMock.with_example_kit()
    flow = _flow(gateway)

    assert flow.view(FAKE_ID) == FAKE_ID
    assert flow.delete(FAKE_ID) is None
    assert flow.io.kinds() == ["show_kit", "show_deleted"]
    assert FAKE_ID not in gateway.kits


def test_view_without_id_reports_instead_of_calling_gateway() -> None:
    gateway = TypekitMock.with_example_kit()
    flow = _flow(gateway)

    assert flow.view() is None
    assert gateway.calls == []
    assert flow.io.kinds() == ["error"]


def test_authenticate_raises_on_rejected_token() -> None:
    flow = _flow(TypekitMock.with_example_kit(auth_error=True))

    with pytest.raises(AuthenticationFailed):
        flow.authenticate()


def test_authenticate_warns_on_malformed_response() -> None:
    flow = _flow(TypekitMock.with_example_kit(malformed=True))

    assert flow.authenticate() is None
    assert flow.io.kinds() == ["unexpected_response"]


def test_run_passes_results_between_handlers() -> None:
    flow = _flow(choices=["Interact with Existing Kits", "Example", "Delete Kit"])

    flow.run()

    assert flow.operations_log == [
        Operation.AUTHENTICATE,
        Operation.MAIN_MENU,
        Operation.LIST_AND_CHOOSE,
        Operation.CHOOSE_ACTION,
        Operation.DELETE,
        Operation.QUIT,
    ]
    assert ("delete_kit", FAKE_ID) in flow.gateway.calls
    assert flow.io.kinds()[0] == "welcome"
    assert flow.io.kinds()[-1] == "goodbye"


def test_run_quit_from_main_menu() -> None:
    flow = _flow(choices=["Quit"])

    flow.run()

    assert flow.operations_log == [Operation.AUTHENTICATE, Operation.MAIN_MENU, Operation.QUIT]
    assert len(flow.queue) == 1


def test_run_rejected_token_stops_before_welcome() -> None:
    flow = _flow(TypekitMock.with_example_kit(auth_error=True))

    with pytest.raises(AuthenticationFailed):
        flow.run()

    assert flow.operations_log == [Operation.AUTHENTICATE]
    assert flow.io.kinds() == []


def test_run_authenticates_before_welcome() -> None:
    flow = _flow(TypekitMock.with_example_kit(malformed=True), choices=["Quit"])

    flow.run()

    assert flow.io.kinds() == ["unexpected_response", "welcome", "goodbye"]
    assert flow.operations_log == [Operation.AUTHENTICATE, Operation.MAIN_MENU, Operation.QUIT]
