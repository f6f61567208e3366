"""
Mock runner — test double for the command runner.

Records every command it is asked to run and succeeds unless told
otherwise for a specific command ID.
"""

from __future__ import annotations

from bosh_bootstrap.adapters.base import CommandRunner
from bosh_bootstrap.core.models.command import Command, Receipt


class MockRunner(CommandRunner):
    """Universal mock runner for testing.

    By default, returns success for everything. Can be configured
    with custom responses per command ID.
    """

    def __init__(
        self,
        runner_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = runner_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[Command] = []
        self.receipts = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[Command]:
        """All commands this mock has executed."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_response(self, command_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific command ID."""
        self._responses[command_id] = receipt

    def set_failure(self, command_id: str, error: str = "Mock failure") -> None:
        """Configure a specific command to fail."""
        self._responses[command_id] = Receipt.failure(command_id, error=error)

    def execute(self, command: Command) -> Receipt:
        self._call_log.append(command)

        if command.id in self._responses:
            return self._responses[command.id]

        return Receipt.success(
            command.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
