"""Adapters — the wizard's side effects: terminal, shell, external tools.

Public re-exports for convenient access.
"""

from bosh_bootstrap.adapters.base import CommandRunner, Terminal
from bosh_bootstrap.adapters.mock import MockRunner

__all__ = [
    "CommandRunner",
    "MockRunner",
    "Terminal",
]
