"""Translate per-request API error messages into user-facing hints."""

from __future__ import annotations

import re
from typing import List, Optional

BAD_REQUEST_HINT = (
    "The API indicated that the request was bad.",
    "It's likely because the entered Font Family ID was invalid,",
    "or that you've reached your maximum Kit limit.",
)
NOT_FOUND_HINT = (
    "The API indicated that it couldn't find the resource.",
    "Make sure that the Kit wasn't deleted while using this application.",
)

_STATUS_RE = re.compile(r"\b([1-5]\d\d)\b")


def extract_status(message: Optional[str]) -> Optional[int]:
    """Return the first HTTP status code embedded in ``message``.

    Args:
        message (Optional[str]): Error text such as ``"404 Not Found"``.

    Returns:
        Optional[int]: The status code, or ``None`` when none is present.
    """
    match = _STATUS_RE.search(message or "")
    if match is None:
        return None
    return int(match.group(1))


def describe_error(message: Optional[str]) -> List[str]:
    """Map an error message to explanatory hint lines.

    Args:
        message (Optional[str]): Error text reported by the gateway.

    Returns:
        List[str]: Hint lines for known status codes; for anything else, the
        raw message so the user still sees what went wrong.
    """
    status = extract_status(message)
    if status == 400:
        return list(BAD_REQUEST_HINT)
    if status == 404:
        return list(NOT_FOUND_HINT)
    text = (message or "").strip()
    return [text] if text else []


__all__ = ["BAD_REQUEST_HINT", "NOT_FOUND_HINT", "describe_error", "extract_status"]
