"""
Local server — run provisioning commands on this machine.

Used when the machine running the wizard is itself the inception VM.
Output streams straight through to the operator's terminal, since
package installs and deploys can run for a long time.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from bosh_bootstrap.adapters.base import CommandRunner
from bosh_bootstrap.core.models.command import Command, Receipt

logger = logging.getLogger(__name__)


class LocalServer(CommandRunner):
    """Run commands through the local shell."""

    def __init__(self, shell: str = "/bin/bash"):
        self.shell = shell
        self.receipts = []

    @property
    def name(self) -> str:
        return "local"

    def is_available(self) -> bool:
        return shutil.which(self.shell) is not None

    def execute(self, command: Command) -> Receipt:
        logger.info("Running %s: %s", command.id, command.description or command.command)
        logger.debug("Executing: %s", command.command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command.command,
                shell=True,
                executable=self.shell,
                timeout=command.timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                command.id,
                error=f"Command timed out after {command.timeout}s",
                metadata={"command": command.command, "timeout": command.timeout},
            )
        except OSError as e:
            return Receipt.failure(
                command.id,
                error=f"Command execution error: {e}",
                metadata={"command": command.command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return Receipt.success(
                command.id,
                duration_ms=elapsed_ms,
                metadata={"command": command.command, "return_code": 0},
            )

        logger.warning("%s exited with code %d", command.id, result.returncode)
        return Receipt.failure(
            command.id,
            error=f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={"command": command.command, "return_code": result.returncode},
        )
