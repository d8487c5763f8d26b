"""Operation-stack engine that drives the interactive kit menu.

``MenuControlFlow`` keeps a queue of pending operations and the result of the
last executed one. ``run`` pops operations off the front, calls the bound
handler with the previous result, and stores what the handler returns. Each
handler may push follow-up operations onto the front of the queue, which is
how a user's menu choice turns into the next few steps of the session.

Example (view flow)::

    [AUTHENTICATE, MAIN_MENU, QUIT]
    -> MAIN_MENU pushes LIST_AND_CHOOSE
    -> LIST_AND_CHOOSE pushes CHOOSE_ACTION, returns the kit id
    -> CHOOSE_ACTION pushes VIEW, AFTER_VIEW, returns the kit id
    -> VIEW shows the kit, AFTER_VIEW asks whether to edit it
    -> QUIT

Dependencies:
    - ``KitPort`` for API calls, ``MenuIOPort`` for all user interaction.

Call context:
    - Built by ``kitinfo/app/controller.py``; ``run`` is called from
      ``kitinfo/app/main.py``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from kitinfo.domain.errors import AuthenticationFailed, MissingExpectedFieldError
from kitinfo.domain.models import KIT_ID_KEY, KitId, KitResponse, ResponseKind
from kitinfo.domain.operations import FlowState, Operation, OperationQueue
from kitinfo.domain.ports import FieldMap, KitPort, MenuIOPort

MAIN_MENU_OPTIONS: Dict[str, Operation] = {
    "Interact with Existing Kits": Operation.LIST_AND_CHOOSE,
    "Create a new Kit": Operation.COLLECT_FIELDS,
    "Quit": Operation.QUIT,
}
KIT_ACTIONS: Dict[str, Operation] = {
    "View Kit info": Operation.VIEW,
    "Update Kit": Operation.COLLECT_FIELDS,
    "Delete Kit": Operation.DELETE,
}

_log = logging.getLogger(__name__)


class MenuControlFlow:
    """Dispatcher plus the fixed handler set of the kit menu."""

    def __init__(
        self,
        gateway: KitPort,
        io: MenuIOPort,
        state: Optional[FlowState] = None,
    ) -> None:
        self.gateway = gateway
        self.io = io
        self.state = state or FlowState()
        self.operations_log: List[Operation] = []
        self._handlers: Dict[Operation, Callable[..., Any]] = {
            Operation.AUTHENTICATE: self.authenticate,
            Operation.MAIN_MENU: self.main_menu,
            Operation.LIST_AND_CHOOSE: self.list_and_choose,
            Operation.CHOOSE_ACTION: self.choose_action,
            Operation.AFTER_VIEW: self.after_view,
            Operation.COLLECT_FIELDS: self.collect_fields,
            Operation.VIEW: self.view,
            Operation.SAVE: self.save,
            Operation.DELETE: self.delete,
        }

    @property
    def queue(self) -> OperationQueue:
        return self.state.queue

    def run(self) -> None:
        """Execute operations until ``QUIT`` reaches the front of the queue.

        Leading ``AUTHENTICATE`` operations run before the welcome message, so
        a rejected token ends the session before it is greeted.

        Raises:
            AuthenticationFailed: The API rejected the token. The session is
                over; the caller reports it.
        """
        while self.state.queue.peek() is Operation.AUTHENTICATE:
            self._dispatch(self.state.queue.pop())
        self.io.welcome()
        while True:
            operation = self.state.queue.pop()
            if operation is Operation.QUIT:
                self.operations_log.append(operation)
                break
            self._dispatch(operation)
        _log.debug("session finished after %d operations", len(self.operations_log))
        self.io.goodbye()

    def _dispatch(self, operation: Operation) -> None:
        self.operations_log.append(operation)
        handler = self._handlers[operation]
        args = () if self.state.last_result is None else (self.state.last_result,)
        _log.debug("operation=%s queue=%r", operation, self.state.queue)
        self.state.last_result = handler(*args)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def authenticate(self, _result: object = None) -> None:
        """Make the cheapest API call to validate the token."""
        resp = self.gateway.list_kits()
        if self._accept(resp) and not resp.ok:
            self.io.show_error(resp.error or "")
        return None

    def main_menu(self, _result: object = None) -> None:
        op = self.io.choose("What would you like to do?", MAIN_MENU_OPTIONS)
        self.state.queue.push(op)
        return None

    def list_and_choose(self, _result: object = None) -> Optional[KitId]:
        """List the account's kits and let the user pick one by name."""
        resp = self.gateway.list_kits()
        if not self._accept(resp) or not resp.ok:
            if resp.kind is ResponseKind.ERROR:
                self.io.show_error(resp.error or "")
            self.state.queue.push(Operation.QUIT)
            return None

        kit_ids = [
            str(entry["id"])
            for entry in resp.value or []
            if isinstance(entry, Mapping) and entry.get("id")
        ]
        if not kit_ids:
            create = self.io.confirm("No Kits found! Would you like to create one?")
            self.state.queue.push(Operation.COLLECT_FIELDS if create else Operation.QUIT)
            return None

        # One request per kit; the listing endpoint only returns ids.
        kits: Dict[str, KitId] = {}
        for kit_id in kit_ids:
            info = self.gateway.get_kit(kit_id)
            if not self._accept(info) or not info.ok:
                if info.kind is ResponseKind.ERROR:
                    self.io.show_error(info.error or "")
                self.state.queue.push(Operation.QUIT)
                return None
            payload = info.value if isinstance(info.value, Mapping) else {}
            label = str(payload.get("name") or kit_id)
            if label in kits:
                label = f"{label} ({kit_id})"
            kits[label] = kit_id

        kit_id = self.io.choose("Select a Kit:", kits)
        self.state.queue.push(Operation.CHOOSE_ACTION)
        return kit_id

    def choose_action(self, kit_id: Optional[KitId] = None) -> Optional[KitId]:
        action = self.io.choose("What would you like to do with this Kit?", KIT_ACTIONS)
        if action is Operation.VIEW:
            self.state.queue.push(Operation.VIEW, Operation.AFTER_VIEW)
        else:
            self.state.queue.push(action)
        return kit_id

    def after_view(self, kit_id: Optional[KitId] = None) -> Optional[KitId]:
        if self.io.confirm("Don't like what you see? Do you want to edit this kit?"):
            self.state.queue.push(Operation.COLLECT_FIELDS)
        return kit_id

    def collect_fields(self, kit_id: Optional[KitId] = None) -> FieldMap:
        """Prompt for kit fields; an id means update, no id means create."""
        if kit_id is None:
            self.state.queue.push(Operation.SAVE)
        else:
            self.state.queue.push(Operation.SAVE, Operation.AFTER_VIEW)
        fields = dict(self.io.collect_fields())
        fields[KIT_ID_KEY] = kit_id
        return fields

    def view(self, kit_id: Optional[KitId] = None) -> Optional[KitId]:
        if kit_id is None:
            self.io.error("No Kit selected.")
            return None
        resp = self.gateway.get_kit(kit_id)
        if self._accept(resp):
            self.io.show_kit(resp)
        return kit_id

    def save(self, fields: Optional[Mapping[str, Any]] = None) -> Optional[KitId]:
        """Create or update a kit from collected fields; return the kit id."""
        params = dict(fields or {})
        kit_id = params.pop(KIT_ID_KEY, None)
        resp = self.gateway.save_kit(params, kit_id)
        if self._accept(resp):
            self.io.show_kit(resp)
        return kit_id

    def delete(self, kit_id: Optional[KitId] = None) -> None:
        if kit_id is None:
            self.io.error("No Kit selected.")
            return None
        resp = self.gateway.delete_kit(kit_id)
        if self._accept(resp):
            self.io.show_deleted(resp)
        return None

    # ------------------------------------------------------------------
    def _accept(self, resp: KitResponse) -> bool:
        """Return False for malformed responses after warning the user.

        Raises:
            AuthenticationFailed: For ``UNAUTHORIZED`` responses.
        """
        if resp.kind is ResponseKind.UNAUTHORIZED:
            raise AuthenticationFailed(resp.error or "Authorization failed.")
        try:
            resp.require()
        except MissingExpectedFieldError as exc:
            _log.info("unexpected API response: %s", exc)
            self.io.unexpected_response()
            return False
        return True


__all__ = ["KIT_ACTIONS", "MAIN_MENU_OPTIONS", "MenuControlFlow"]
