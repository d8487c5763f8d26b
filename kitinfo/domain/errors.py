"""Domain-level error types shared by the flow, adapters, and entry point.

These errors cross layer boundaries without leaking transport-specific
exception details. Transport failures stay in ``kitinfo.adapters.api_errors``.
"""
from __future__ import annotations


class AuthenticationFailed(RuntimeError):
    """The API rejected the configured token; the session cannot continue."""

    def __init__(self, message: str = "The API rejected the configured token.") -> None:
        super().__init__(message)
        self.message = message


class MissingExpectedFieldError(RuntimeError):
    """The API answered with neither the expected field nor an error."""

    def __init__(self, field: str, context: str = "") -> None:
        where = f" ({context})" if context else ""
        super().__init__(
            f"The response from the endpoint is missing an expected value: '{field}'{where}"
        )
        self.field = field
        self.context = context


class SettingsError(ValueError):
    """Invalid configuration value."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message
