"""Interactive prompting capability used by the installation flow."""

from abc import ABC, abstractmethod
from typing import Optional

import click


class Prompter(ABC):
    """Asks the user questions.

    Installation logic only talks to this interface so it can be driven by
    a scripted implementation in tests.
    """

    @abstractmethod
    def confirm(self, message: str, default: bool = True) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def ask_text(self, message: str, name: str, required: bool = True) -> Optional[str]:
        """Ask for free text.

        Returns:
            The entered text, or None when an optional answer was left blank
        """

    def echo(self, message: str = "") -> None:
        """Show an informational message."""
        click.echo(message)


class ClickPrompter(Prompter):
    """Terminal prompter backed by click."""

    def confirm(self, message: str, default: bool = True) -> bool:
        return click.confirm(message, default=default)

    def ask_text(self, message: str, name: str, required: bool = True) -> Optional[str]:
        while True:
            value = click.prompt(message, default="", show_default=False, type=str)
            if value:
                return value
            if not required:
                return None
            click.echo(f"{name} is required", err=True)
