"""REST adapter implementing ``KitPort`` against the Typekit v1 JSON API.

Every public method returns a ``KitResponse``. Non-2xx statuses and transport
failures are raised as typed ``api_errors`` exceptions inside the adapter and
converted here, so callers never see ``requests`` exceptions.

Dependencies:
    - ``RetryingSession``/``HttpConfig`` for shared HTTP policy.
    - ``api_errors`` helpers for status-to-error conversion.

Call context:
    - Constructed by ``kitinfo/app/controller.py``.
    - Invoked by handlers in ``kitinfo/usecases/menu_control_flow.py``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from kitinfo.adapters.api_errors import (
    ApiAuthError,
    ApiError,
    parse_error_payload,
    raise_for_status,
)
from kitinfo.adapters.http_client import HttpConfig, RetryingSession
from kitinfo.domain.models import KitId, KitResponse
from kitinfo.domain.ports import KitPort

DEFAULT_BASE_URL = "https://typekit.com/api/v1/json/"

_log = logging.getLogger(__name__)


class TypekitRestAdapter(KitPort):
    """HTTP adapter for the ``/kits`` endpoints."""

    def __init__(
        self,
        api_token: Optional[str],
        *,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url:
            raise ValueError("TypekitRestAdapter requires a base URL")
        self.base_url = base_url
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_token, self.cfg)

    def list_kits(self) -> KitResponse:
        """List kit ids on the account via ``GET kits``."""
        url = self._make_url("kits")
        return self._call("kits", "list_kits", lambda: self.session.get(url))

    def get_kit(self, kit_id: KitId) -> KitResponse:
        """Fetch one kit via ``GET kits/{id}``."""
        url = self._make_url(f"kits/{self._normalize_id(kit_id)}")
        return self._call("kit", f"get_kit[{kit_id}]", lambda: self.session.get(url))

    def save_kit(
        self, fields: Mapping[str, Any], kit_id: Optional[KitId] = None
    ) -> KitResponse:
        """Create (no id) or update (id) a kit via ``POST kits[/{id}]``."""
        path = "kits" if kit_id is None else f"kits/{self._normalize_id(kit_id)}"
        url = self._make_url(path)
        form = self._form_payload(fields)
        ctx = "create_kit" if kit_id is None else f"update_kit[{kit_id}]"
        return self._call("kit", ctx, lambda: self.session.post(url, form=form))

    def delete_kit(self, kit_id: KitId) -> KitResponse:
        """Delete one kit via ``DELETE kits/{id}``."""
        url = self._make_url(f"kits/{self._normalize_id(kit_id)}")
        return self._call("ok", f"delete_kit[{kit_id}]", lambda: self.session.delete(url))

    # ------------------------------------------------------------------
    def _call(
        self, expected_field: str, ctx: str, send: Callable[[], requests.Response]
    ) -> KitResponse:
        """Run one request and classify its outcome by ``expected_field``."""
        try:
            resp = send()
            if not 200 <= resp.status_code < 300:
                raise_for_status(resp.status_code, parse_error_payload(resp), ctx)
            payload = self._json_any(resp)
        except ApiAuthError as exc:
            _log.info("%s: authorization failed (%s)", ctx, exc)
            return KitResponse.unauthorized(expected_field, str(exc))
        except ApiError as exc:
            _log.info("%s failed: %s", ctx, exc)
            return KitResponse.failure(expected_field, str(exc))
        result = KitResponse.from_payload(payload, expected_field)
        if result.error is not None:
            _log.info("%s: %s", ctx, result.error)
        return result

    def _make_url(self, path: str) -> str:
        base = self.base_url
        if base.endswith("/"):
            base = base[:-1]
        return f"{base}/{path}"

    @staticmethod
    def _normalize_id(kit_id: KitId) -> str:
        cleaned = str(kit_id or "").strip()
        if not cleaned:
            raise ValueError("Kit id must be a non-empty string.")
        return cleaned

    @staticmethod
    def _form_payload(fields: Mapping[str, Any]) -> Dict[str, str]:
        """Flatten field values into form parameters.

        List values (domains) are sent as a comma-separated string; ``None``
        values are left out so blank prompts do not clear existing values.
        """
        form: Dict[str, str] = {}
        for key, value in fields.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                form[key] = ",".join(str(item) for item in value)
            else:
                form[key] = str(value)
        return form

    @staticmethod
    def _json_any(resp: requests.Response) -> Any:
        """Parse response JSON; undecodable bodies count as malformed."""
        try:
            return resp.json()
        except ValueError:
            snippet = getattr(resp, "text", "")[:400]
            _log.warning("Invalid JSON response: %s", snippet)
            return None


__all__ = ["DEFAULT_BASE_URL", "TypekitRestAdapter"]
