"""Operation identifiers and the front-insertable queue that sequences them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterable, Iterator, Optional


class Operation(Enum):
    """Closed set of steps the menu flow knows how to execute."""

    AUTHENTICATE = "authenticate"
    MAIN_MENU = "main_menu"
    LIST_AND_CHOOSE = "list_and_choose"
    CHOOSE_ACTION = "choose_action"
    AFTER_VIEW = "after_view"
    COLLECT_FIELDS = "collect_fields"
    VIEW = "view"
    SAVE = "save"
    DELETE = "delete"
    QUIT = "quit"

    def __str__(self) -> str:
        return self.value


STARTUP_SEQUENCE = (Operation.AUTHENTICATE, Operation.MAIN_MENU, Operation.QUIT)


class OperationQueue:
    """Remaining plan of operations.

    New operations are inserted at the front, so a just-scheduled follow-up
    runs before anything queued earlier. ``push(a, b)`` leaves ``a`` first.
    """

    def __init__(self, operations: Iterable[Operation] = STARTUP_SEQUENCE) -> None:
        self._items: Deque[Operation] = deque(operations)

    def push(self, *operations: Operation) -> None:
        """Insert ``operations`` at the front, keeping their given order."""
        for op in reversed(operations):
            self._items.appendleft(op)

    def pop(self) -> Operation:
        """Remove and return the next operation.

        An exhausted queue yields ``Operation.QUIT`` so the dispatcher always
        reaches its terminal state.
        """
        if not self._items:
            return Operation.QUIT
        return self._items.popleft()

    def peek(self) -> Optional[Operation]:
        return self._items[0] if self._items else None

    def __iter__(self) -> Iterator[Operation]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(str(op) for op in self._items)
        return f"OperationQueue([{inner}])"


@dataclass
class FlowState:
    """Mutable dispatcher state: the queue plus the last handler result."""

    queue: OperationQueue = field(default_factory=OperationQueue)
    last_result: Optional[object] = None
