from __future__ import annotations

import io
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from rich.console import Console

from kitinfo.app.console_io import ConsoleMenuIO
from kitinfo.domain.models import KitResponse


class FakeMenuIO:
    """MenuIOPort double that answers from scripted queues and records output."""

    def __init__(
        self,
        *,
        choices: Sequence[Any] = (),
        confirms: Sequence[bool] = (),
        fields: Sequence[Dict[str, Any]] = (),
    ) -> None:
        self.choices = list(choices)
        self.confirms = list(confirms)
        self.fields = list(fields)
        self.events: List[Tuple[str, Any]] = []
        self.prompts: List[Tuple[str, Dict[str, Any]]] = []

    def welcome(self) -> None:
        self.events.append(("welcome", None))

    def goodbye(self) -> None:
        self.events.append(("goodbye", None))

    def say(self, text: str) -> None:
        self.events.append(("say", text))

    def error(self, text: str) -> None:
        self.events.append(("error", text))

    def choose(self, prompt: str, options: Mapping[str, Any]) -> Any:
        self.prompts.append((prompt, dict(options)))
        answer = self.choices.pop(0)
        if answer in options:
            return options[answer]
        return answer

    def confirm(self, prompt: str) -> bool:
        self.events.append(("confirm", prompt))
        return self.confirms.pop(0)

    def collect_fields(self) -> Dict[str, Any]:
        return dict(self.fields.pop(0))

    def show_kit(self, response: KitResponse) -> None:
        self.events.append(("show_kit", response))

    def show_deleted(self, response: KitResponse) -> None:
        self.events.append(("show_deleted", response))

    def show_error(self, message: str) -> None:
        self.events.append(("show_error", message))

    def unexpected_response(self) -> None:
        self.events.append(("unexpected_response", None))

    def auth_failed(self) -> None:
        self.events.append(("auth_failed", None))

    def kinds(self) -> List[str]:
        return [kind for kind, _ in self.events]


def make_console_io(*answers: str) -> Tuple[ConsoleMenuIO, Console]:
    """Console IO reading ``answers`` line by line and recording its output."""
    console = Console(
        file=io.StringIO(),
        record=True,
        width=120,
        color_system=None,
        force_terminal=False,
    )
    stream: Optional[io.StringIO] = io.StringIO("".join(f"{a}\n" for a in answers))
    return ConsoleMenuIO(console, stream=stream), console


def output_of(console: Console) -> str:
    return console.export_text(clear=False)


__all__ = ["FakeMenuIO", "make_console_io", "output_of"]
