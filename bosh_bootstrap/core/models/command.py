"""
Command and Receipt models — the command runner contract.

Commands are the shell steps a provisioning stage wants run. Receipts
are the outcome of each one. The runner sends Commands and returns
Receipts, never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Command(BaseModel):
    """A shell step within a provisioning stage."""

    id: str                         # unique within its stage
    description: str = ""           # human-readable summary
    command: str                    # shell command line
    timeout: int = 1800             # seconds


class Receipt(BaseModel):
    """Result of running one Command."""

    command_id: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(cls, command_id: str, output: str = "", **kwargs: Any) -> Receipt:
        """Create a success receipt."""
        return cls(command_id=command_id, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, command_id: str, error: str, **kwargs: Any) -> Receipt:
        """Create a failure receipt."""
        return cls(command_id=command_id, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, command_id: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Create a skip receipt."""
        return cls(command_id=command_id, status="skipped", output=reason, **kwargs)
