"""Domain package exports for operations, kit models, and ports."""

from .errors import AuthenticationFailed, MissingExpectedFieldError, SettingsError
from .models import KIT_ID_KEY, Kit, KitResponse, ResponseKind
from .operations import FlowState, Operation, OperationQueue

__all__ = [
    "AuthenticationFailed",
    "FlowState",
    "KIT_ID_KEY",
    "Kit",
    "KitResponse",
    "MissingExpectedFieldError",
    "Operation",
    "OperationQueue",
    "ResponseKind",
    "SettingsError",
]
