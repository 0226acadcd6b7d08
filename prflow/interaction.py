"""
User interaction for the interactive workflow.

The workflow only talks to a Prompter; ConsolePrompter implements it on the
terminal with click.
"""

from collections.abc import Sequence
from typing import Protocol

import click

_AFFIRMATIVE = {"yes", "y"}


def is_affirmative(answer: str | None) -> bool:
    """Only an explicit yes counts; anything else, including no answer, is no."""
    return answer is not None and answer.strip().lower() in _AFFIRMATIVE


class Prompter(Protocol):
    """Presents messages and collects user choices."""

    def notify(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def ask_yes_no(self, question: str) -> bool: ...

    def ask_text(self, question: str) -> str: ...

    def choose(self, question: str, options: Sequence[str]) -> int | None:
        """Return the 0-based index of the chosen option, or None if invalid."""
        ...


class ConsolePrompter:
    """Prompter reading from stdin and writing to the terminal."""

    def notify(self, message: str) -> None:
        click.echo(message)

    def warn(self, message: str) -> None:
        click.secho(message, fg="yellow", err=True)

    def ask_yes_no(self, question: str) -> bool:
        answer = click.prompt(f"{question} (yes/no)", default="", show_default=False)
        return is_affirmative(answer)

    def ask_text(self, question: str) -> str:
        return click.prompt(question, default="", show_default=False).strip()

    def choose(self, question: str, options: Sequence[str]) -> int | None:
        for number, option in enumerate(options, start=1):
            click.echo(f"{number}. {option}")

        answer = click.prompt(question, default="", show_default=False).strip()
        try:
            index = int(answer) - 1
        except ValueError:
            return None
        if 0 <= index < len(options):
            return index
        return None
