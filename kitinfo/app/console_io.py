"""Console implementation of ``MenuIOPort`` built on ``rich``.

All prompts accept an optional input ``stream`` so tests can script answers
with ``io.StringIO`` instead of patching stdin.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, TextIO, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from kitinfo.domain.models import KitResponse, family_field
from kitinfo.usecases.error_mapping import describe_error

T = TypeVar("T")

_DOMAIN_SPLIT = re.compile(r",\s*")
_YES = {"y", "yes", "true", "t", "1"}
_NO = {"n", "no", "false", "f", "0"}


class ConsoleMenuIO:
    """Menus, confirmations, and kit field prompts for the terminal."""

    def __init__(
        self,
        console: Optional[Console] = None,
        *,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.console = console or Console(highlight=False)
        self.stream = stream

    # ---- basic output ----
    def say(self, text: str) -> None:
        self.console.print(text, markup=False)

    def error(self, text: str) -> None:
        self.console.print(f"[bold red]{escape(text)}[/bold red]")

    def ok(self, text: str) -> None:
        self.console.print(f"[green]{escape(text)}[/green]")

    def welcome(self) -> None:
        self.say("Welcome to kit_info!")

    def goodbye(self) -> None:
        self.say("Thanks for using kit_info!")

    # ---- prompts ----
    def choose(self, prompt: str, options: Mapping[str, T]) -> T:
        """Show a numbered menu and return the value of the chosen label."""
        labels = list(options)
        if not labels:
            raise ValueError("choose() requires at least one option")
        self.console.print(f"[bold]{escape(prompt)}[/bold]")
        for index, label in enumerate(labels, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {escape(label)}")
        answer = Prompt.ask(
            "Choice",
            console=self.console,
            choices=[str(i) for i in range(1, len(labels) + 1)],
            default="1",
            stream=self.stream,
        )
        return options[labels[int(answer) - 1]]

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; blank or unreadable answers count as yes."""
        answer = Prompt.ask(
            f"{escape(prompt)} [dim](Y/n)[/dim]",
            console=self.console,
            default="",
            show_default=False,
            stream=self.stream,
        )
        text = answer.strip().lower()
        if not text or text in _YES:
            return True
        if text in _NO:
            return False
        self.say('Invalid input. Proceeding as if "Y" was entered.')
        return True

    def ask(self, prompt: str) -> str:
        answer = Prompt.ask(
            escape(prompt),
            console=self.console,
            default="",
            show_default=False,
            stream=self.stream,
        )
        return answer.strip()

    def collect_fields(self) -> Dict[str, Any]:
        """Prompt for kit fields in the form the API expects.

        Returns a mapping with ``name`` (str) and ``domains`` (list of str)
        when entered, plus one ``families[<i>][id]`` entry per family id.
        Blank answers are left out.
        """
        self.say("Please enter the specified parameter values.")
        self.say("Leave any field you don't wish to specify/update blank.")
        fields: Dict[str, Any] = {}
        name = self.ask("Name:")
        if name:
            fields["name"] = name
        domains = self.ask("Domains (comma separated list):")
        if domains:
            fields["domains"] = [d for d in _DOMAIN_SPLIT.split(domains) if d]
        fields.update(self.collect_family_ids())
        return fields

    def collect_family_ids(self) -> Dict[str, str]:
        """Ask how many families to add, then one id per family."""
        raw = self.ask("Number of Font Families to add (enter 0 to skip):")
        if not raw:
            return {}
        try:
            count = int(raw)
        except ValueError:
            self.say("Invalid input, skipping Font Family input.")
            return {}
        family_ids: Dict[str, str] = {}
        for index in range(max(count, 0)):
            family_ids[family_field(index)] = self.ask(f"Enter ID for Family #{index + 1}:")
        return family_ids

    # ---- results ----
    def print_json(self, payload: Any) -> None:
        self.console.print_json(data=payload, indent=2)

    def show_kit(self, response: KitResponse) -> None:
        if response.ok:
            self.print_json(response.to_display())
        else:
            self.show_error(response.error or "")

    def show_deleted(self, response: KitResponse) -> None:
        if response.ok:
            self.ok("Kit successfully deleted!")
        else:
            self.show_error(response.error or "")

    def show_error(self, message: str) -> None:
        self.error("An error occurred!")
        for line in describe_error(message):
            self.say(line)

    def unexpected_response(self) -> None:
        self.error("The API returned an unexpected response.")
        self.error("There may be something wrong with the API. Try again later.")

    def auth_failed(self) -> None:
        self.error("Authorization failed!")
        self.error("Please check the API token set in KITINFO_API_TOKEN or settings.json.")


__all__: List[str] = ["ConsoleMenuIO"]
