# File: crudgen/console.py
"""
crudgen - Terminal Prompts
==========================
Thin layer over ``click`` for everything the interactive flow asks or
tells the user. All reading goes through ``_read`` and ``_read_confirm``,
so a scripted console only has to replace those two.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import click

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.console")


class Console:
    """Prompts, confirmations, selections and coloured output."""

    # -----------------------------------------------------------------
    # Low-level input (override in tests)
    # -----------------------------------------------------------------

    def _read(self, text: str, default: Optional[str]) -> str:
        return click.prompt(text, default=default, show_default=default is not None)

    def _read_confirm(self, text: str, default: bool) -> bool:
        return click.confirm(text, default=default)

    # -----------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------

    def prompt(
        self,
        text: str,
        *,
        required: bool = False,
        default: Optional[str] = None,
    ) -> str:
        """
        Ask for a line of input.

        A *required* prompt without a default keeps asking until the answer
        is not blank; otherwise an empty answer yields *default* (or ``""``).
        """
        while True:
            answer: str = self._read(text, default).strip()
            if answer:
                return answer
            if default is not None:
                return default
            if not required:
                return ""
            self.output_error("A value is required.")

    def confirm(self, text: str, default: bool = False) -> bool:
        return self._read_confirm(text, default)

    def select(self, text: str, options: Dict[str, str]) -> str:
        """
        Let the user pick one key of *options*.

        Typing ``?`` lists every key with its description.
        """
        keys: str = ",".join(list(options) + ["?"])
        while True:
            answer: str = self.prompt(f"{text} [{keys}]", required=True)
            if answer == "?":
                for key, description in options.items():
                    self.output(f" {key} - {description}")
                continue
            if answer in options:
                logger.debug("Selected option '%s'.", answer)
                return answer
            self.output_error(f"'{answer}' is not a valid option.")

    # -----------------------------------------------------------------
    # Output
    # -----------------------------------------------------------------

    def output(self, message: str) -> None:
        click.echo(message)

    def output_info(self, message: str) -> None:
        click.secho(message, fg="blue")

    def output_success(self, message: str) -> None:
        click.secho(message, fg="green")

    def output_error(self, message: str) -> None:
        click.secho(message, fg="red", err=True)

    def clear(self) -> None:
        click.clear()


__all__: List[str] = ["Console"]
