from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from kitinfo.domain.models import Kit, KitId, KitResponse, ResponseKind
from kitinfo.domain.ports import KitPort

NOT_FOUND_ERROR = "404 Not Found"
BAD_REQUEST_ERROR = "400 Bad Request"
UNAUTHORIZED_ERROR = "401 Unauthorized"

EXAMPLE_KIT = Kit(id="abc1def", name="Example", domains=("example.com",))


@dataclass
class TypekitMock(KitPort):
    """Offline substitute for ``TypekitRestAdapter`` with deterministic responses.

    The public flags switch individual calls into their most likely failure:
    ``auth_error`` rejects every call, ``not_found_error`` fails get/delete,
    ``bad_request_error`` fails save, ``malformed`` answers list calls with an
    empty object, and ``empty`` hides all kits from the listing.
    """

    kits: Dict[KitId, Kit] = field(default_factory=dict)
    auth_error: bool = False
    not_found_error: bool = False
    bad_request_error: bool = False
    malformed: bool = False
    empty: bool = False
    calls: List[tuple] = field(default_factory=list)

    @classmethod
    def with_example_kit(cls, **flags: Any) -> "TypekitMock":
        return cls(kits={EXAMPLE_KIT.id: EXAMPLE_KIT}, **flags)

    # ---------- KitPort ----------

    def list_kits(self) -> KitResponse:
        self.calls.append(("list_kits",))
        if self.auth_error:
            return KitResponse.unauthorized("kits", UNAUTHORIZED_ERROR)
        if self.malformed:
            return KitResponse.from_payload({}, "kits")
        kits = [] if self.empty else [
            {"id": kit_id, "link": f"/api/v1/json/kits/{kit_id}"} for kit_id in self.kits
        ]
        return KitResponse(ResponseKind.OK, "kits", data={"kits": kits})

    def get_kit(self, kit_id: KitId) -> KitResponse:
        self.calls.append(("get_kit", kit_id))
        if self.auth_error:
            return KitResponse.unauthorized("kit", UNAUTHORIZED_ERROR)
        kit = self.kits.get(kit_id)
        if self.not_found_error or kit is None:
            return KitResponse.failure("kit", NOT_FOUND_ERROR)
        return KitResponse(ResponseKind.OK, "kit", data={"kit": kit.to_payload()})

    def save_kit(
        self, fields: Mapping[str, Any], kit_id: Optional[KitId] = None
    ) -> KitResponse:
        self.calls.append(("save_kit", dict(fields), kit_id))
        if self.auth_error:
            return KitResponse.unauthorized("kit", UNAUTHORIZED_ERROR)
        if self.bad_request_error:
            return KitResponse.failure("kit", BAD_REQUEST_ERROR)
        if kit_id is None:
            current = Kit(id=uuid4().hex[:7])
        else:
            current = self.kits.get(kit_id)
            if current is None:
                return KitResponse.failure("kit", NOT_FOUND_ERROR)
        kit = self._apply_fields(current, fields)
        self.kits[kit.id] = kit
        return KitResponse(ResponseKind.OK, "kit", data={"kit": kit.to_payload()})

    def delete_kit(self, kit_id: KitId) -> KitResponse:
        self.calls.append(("delete_kit", kit_id))
        if self.auth_error:
            return KitResponse.unauthorized("ok", UNAUTHORIZED_ERROR)
        if self.not_found_error or kit_id not in self.kits:
            return KitResponse.failure("ok", NOT_FOUND_ERROR)
        del self.kits[kit_id]
        return KitResponse(ResponseKind.OK, "ok", data={"ok": "true"})

    # ---------- Helpers ----------

    @staticmethod
    def _apply_fields(kit: Kit, fields: Mapping[str, Any]) -> Kit:
        name = fields.get("name") or kit.name
        domains = fields.get("domains")
        families = [
            str(value)
            for key, value in fields.items()
            if key.startswith("families[") and value
        ]
        return Kit(
            id=kit.id,
            name=str(name),
            domains=tuple(domains) if domains else kit.domains,
            families=tuple(families) if families else kit.families,
            analytics=kit.analytics,
            optimize_performance=kit.optimize_performance,
        )
