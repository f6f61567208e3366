"""
Adapter base — the contracts between the wizard and the outside world.

The stages only talk to the operator through a Terminal and only run
shell steps through a CommandRunner. Neither is called directly by
anything else, so tests swap in scripted doubles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bosh_bootstrap.core.models.command import Command, Receipt


class Terminal(ABC):
    """Operator-facing input and output.

    Prompts block until the operator answers. Implementations that
    cannot reach an operator raise NonInteractiveError instead of
    inventing an answer.
    """

    @abstractmethod
    def choose(self, prompt: str, choices: list[str]) -> str:
        """Present a single-choice menu and return the chosen entry."""

    @abstractmethod
    def ask(self, prompt: str, default: str | None = None) -> str:
        """Ask for free text, returning ``default`` on empty input."""

    @abstractmethod
    def ask_secret(self, prompt: str) -> str:
        """Ask for a value without echoing it."""

    @abstractmethod
    def say(self, message: str = "", color: str | None = None) -> None:
        """Print a line."""

    def header(self, title: str, skipping: str | None = None) -> None:
        """Announce a new section of the bootstrapper."""
        self.say()
        if skipping:
            self.say(f"Skipping {title}", color="yellow")
            self.say(skipping)
        else:
            self.say(title, color="green")
        self.say()

    def confirm(self, message: str) -> None:
        """Report a fact the wizard has settled on."""
        self.say(f"Confirming: {message}", color="green")
        self.say()


class CommandRunner(ABC):
    """Runs an ordered list of shell commands against a target host.

    Runners NEVER raise for command failures: each outcome is captured
    in a Receipt and ``run`` reports overall success.
    """

    receipts: list[Receipt]

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'local')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check that the target host can be reached. Should never raise."""

    @abstractmethod
    def execute(self, command: Command) -> Receipt:
        """Run a single command and return its receipt."""

    def run(self, commands: list[Command]) -> bool:
        """Run commands in order, stopping at the first failure.

        Commands after a failure are recorded as skipped.
        """
        self.receipts = []
        failed = False
        for command in commands:
            if failed:
                self.receipts.append(Receipt.skip(command.id, reason="previous command failed"))
                continue
            receipt = self.execute(command)
            self.receipts.append(receipt)
            failed = receipt.failed
        return not failed

    @property
    def first_failure(self) -> Receipt | None:
        """The receipt of the command that stopped the last run, if any."""
        return next((r for r in self.receipts if r.failed), None)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
