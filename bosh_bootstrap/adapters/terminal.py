"""
Click terminal — the operator's keyboard and screen.

Menus are numbered lists answered by index:

    1. AWS (default)
    2. AWS (bosh)
    Choose infrastructure:  1

Every prompt requires a real terminal on stdin. Without one the wizard
stops with NonInteractiveError rather than guessing an answer.
"""

from __future__ import annotations

import logging
import sys

import click

from bosh_bootstrap.adapters.base import Terminal
from bosh_bootstrap.core.errors import NonInteractiveError

logger = logging.getLogger(__name__)


class ClickTerminal(Terminal):
    """Terminal backed by click prompts and colored output."""

    def __init__(self, interactive: bool | None = None):
        self._interactive = interactive

    @property
    def interactive(self) -> bool:
        if self._interactive is None:
            return sys.stdin.isatty()
        return self._interactive

    def _require_interactive(self, prompt: str) -> None:
        if not self.interactive:
            raise NonInteractiveError(
                f"Cannot ask {prompt.strip().rstrip(':')!r} without an interactive terminal",
                hint="Run the wizard from a terminal, or pre-populate the settings manifest.",
            )

    def choose(self, prompt: str, choices: list[str]) -> str:
        self._require_interactive(prompt)
        for i, choice in enumerate(choices, start=1):
            click.echo(f"{i}. {choice}")
        index = click.prompt(
            prompt.rstrip(),
            type=click.IntRange(1, len(choices)),
            prompt_suffix="  ",
        )
        logger.debug("Menu %r answered with %d", prompt, index)
        return choices[index - 1]

    def ask(self, prompt: str, default: str | None = None) -> str:
        self._require_interactive(prompt)
        return click.prompt(prompt.rstrip(), default=default, prompt_suffix=" ")

    def ask_secret(self, prompt: str) -> str:
        self._require_interactive(prompt)
        return click.prompt(prompt.rstrip(), hide_input=True, prompt_suffix=" ")

    def say(self, message: str = "", color: str | None = None) -> None:
        if color:
            click.secho(message, fg=color)
        else:
            click.echo(message)
