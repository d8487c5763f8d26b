from __future__ import annotations

from http import HTTPStatus
from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the Typekit API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiAuthError(ApiClientError):
    """HTTP 401: the token was rejected."""


class ApiServerError(ApiError):
    """HTTP 5xx from the Typekit API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except ValueError:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def status_label(status: int) -> str:
    """Return ``"404 Not Found"`` style labels for HTTP status codes."""
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return f"{status} HTTP Error"


def build_error_message(status: int, payload: Any) -> str:
    """Compose the user-facing message; it always starts with the status code."""
    label = status_label(status)
    detail = first_string(payload)
    if detail and detail.lower() != label.split(" ", 1)[-1].lower():
        return f"{label}: {detail}"
    return label


def first_string(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in ("errors", "error", "message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (list, dict)):
                candidate = first_string(value)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


def raise_for_status(status: int, payload: Any, ctx: str) -> None:
    """Raise the typed adapter error matching a non-2xx status."""
    if 200 <= status < 300:
        return
    message = build_error_message(status, payload)
    if status == 401:
        raise ApiAuthError(message, status=status, payload=payload, context=ctx)
    if 400 <= status < 500:
        raise ApiClientError(message, status=status, payload=payload, context=ctx)
    if 500 <= status < 600:
        raise ApiServerError(message, status=status, payload=payload, context=ctx)
    raise ApiError(message, status=status, payload=payload, context=ctx)
