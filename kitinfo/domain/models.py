"""Typed kit records and the result type returned by kit gateways."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import MissingExpectedFieldError

KitId = str

KIT_ID_KEY = "id"
"""Reserved field-mapping key carrying the kit id between collect and save."""


class ResponseKind(Enum):
    """Outcome classes of a gateway call."""

    OK = "ok"
    ERROR = "error"
    UNAUTHORIZED = "unauthorized"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class KitResponse:
    """Gateway result: either the expected payload field or an error message.

    ``data`` holds the decoded JSON body for ``OK`` responses. ``error`` holds
    a human-readable message (usually starting with the HTTP status, e.g.
    ``"404 Not Found"``) for every other kind.
    """

    kind: ResponseKind
    expected_field: str
    data: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any, expected_field: str) -> "KitResponse":
        """Classify a decoded JSON body by the field the endpoint promises."""
        if isinstance(payload, Mapping):
            if payload.get(expected_field) is not None:
                return cls(ResponseKind.OK, expected_field, data=dict(payload))
            error = payload.get("error")
            if error is not None:
                return cls(ResponseKind.ERROR, expected_field, error=str(error))
        return cls(
            ResponseKind.MALFORMED,
            expected_field,
            error=f"Response is missing '{expected_field}'",
        )

    @classmethod
    def failure(cls, expected_field: str, message: str) -> "KitResponse":
        return cls(ResponseKind.ERROR, expected_field, error=message)

    @classmethod
    def unauthorized(cls, expected_field: str, message: str) -> "KitResponse":
        return cls(ResponseKind.UNAUTHORIZED, expected_field, error=message)

    @property
    def ok(self) -> bool:
        return self.kind is ResponseKind.OK

    @property
    def value(self) -> Any:
        """Return the expected field, or ``None`` when the call did not succeed."""
        if not self.ok:
            return None
        return self.data.get(self.expected_field)

    def require(self) -> "KitResponse":
        """Raise ``MissingExpectedFieldError`` for malformed responses."""
        if self.kind is ResponseKind.MALFORMED:
            raise MissingExpectedFieldError(self.expected_field)
        return self

    def to_display(self) -> Dict[str, Any]:
        """Payload shape shown to the user."""
        if self.ok:
            return dict(self.data)
        return {"error": self.error}


@dataclass(frozen=True)
class Kit:
    """Kit record; ``to_payload`` renders it the way the Typekit API does."""

    id: KitId
    name: str = ""
    domains: Tuple[str, ...] = ()
    families: Tuple[str, ...] = ()
    analytics: bool = False
    optimize_performance: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Kit id must be a non-empty string.")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "analytics": self.analytics,
            "domains": list(self.domains),
            "families": [{"id": family_id} for family_id in self.families],
            "optimize_performance": self.optimize_performance,
        }


def family_field(index: int) -> str:
    """Form key the Typekit API expects for the ``index``-th family id."""
    return f"families[{index}][id]"
