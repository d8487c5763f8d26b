from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, TypeVar

from .models import KitId, KitResponse

T = TypeVar("T")
FieldMap = Dict[str, Any]


# ---- Ports (Hexagonal boundaries) ----
class KitPort(Protocol):
    """List/get/save/delete operations against the kit API.

    Every call returns a ``KitResponse``; transport failures never escape as
    exceptions.
    """

    def list_kits(self) -> KitResponse: ...  # data["kits"] -> [{"id": ..., "link": ...}]
    def get_kit(self, kit_id: KitId) -> KitResponse: ...  # data["kit"]
    def save_kit(
        self, fields: Mapping[str, Any], kit_id: Optional[KitId] = None
    ) -> KitResponse: ...  # kit_id None -> create, else update; data["kit"]
    def delete_kit(self, kit_id: KitId) -> KitResponse: ...  # data["ok"]


class MenuIOPort(Protocol):
    """Console interaction used by the menu flow."""

    def welcome(self) -> None: ...
    def goodbye(self) -> None: ...
    def say(self, text: str) -> None: ...
    def error(self, text: str) -> None: ...
    def choose(self, prompt: str, options: Mapping[str, T]) -> T: ...
    def confirm(self, prompt: str) -> bool: ...
    def collect_fields(self) -> FieldMap: ...
    def show_kit(self, response: KitResponse) -> None: ...
    def show_deleted(self, response: KitResponse) -> None: ...
    def show_error(self, message: str) -> None: ...
    def unexpected_response(self) -> None: ...
    def auth_failed(self) -> None: ...
