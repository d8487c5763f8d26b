from __future__ import annotations

from kitinfo.usecases.error_mapping import (
    BAD_REQUEST_HINT,
    NOT_FOUND_HINT,
    describe_error,
    extract_status,
)


def test_bad_request_hint() -> None:
    lines = describe_error("400 Bad Request: Family does not exist")

    assert lines == list(BAD_REQUEST_HINT)
    assert "The API indicated that the request was bad." in lines


def test_not_found_hint() -> None:
    assert describe_error("404 Not Found") == list(NOT_FOUND_HINT)


def test_other_codes_report_raw_message() -> None:
    assert describe_error("503 Service Unavailable") == ["503 Service Unavailable"]
    assert describe_error("Timeout contacting https://typekit.com") == [
        "Timeout contacting https://typekit.com"
    ]
    assert describe_error(None) == []


def test_extract_status_ignores_longer_numbers() -> None:
    assert extract_status("404 Not Found") == 404
    assert extract_status("kit 14004 missing") is None
    assert extract_status("") is None
