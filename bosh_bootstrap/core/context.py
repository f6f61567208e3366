"""
Wizard context — everything one bootstrap run works with.

Built once by the CLI entry point and handed to each stage:

    - CLI:    main.py  → WizardContext(store=SettingsStore(), terminal=ClickTerminal(), ...)
    - Tests:  conftest → WizardContext(store=SettingsStore(tmp_path / ...), terminal=ScriptedTerminal(...))

The fog configuration and provider catalog are loaded lazily and kept
for the rest of the run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bosh_bootstrap.adapters.base import CommandRunner, Terminal
from bosh_bootstrap.adapters.shell import tools
from bosh_bootstrap.core.config.loader import load_fog_config, resolve_fog_path
from bosh_bootstrap.core.models.provider import ProviderOption
from bosh_bootstrap.core.persistence.settings_file import SettingsStore
from bosh_bootstrap.core.services.provider_catalog import parse_profiles


@dataclass
class WizardContext:
    """Explicit per-run state, replacing process-wide globals."""

    store: SettingsStore
    terminal: Terminal
    runner: CommandRunner | None = None
    hash_password: Callable[[str], str] = tools.salted_password
    find_stemcell: Callable[[str], str] = tools.latest_micro_stemcell

    _fog_config: dict[str, dict[str, Any]] | None = field(default=None, repr=False)
    _catalog: list[ProviderOption] | None = field(default=None, repr=False)

    @property
    def fog_path(self) -> Path:
        return resolve_fog_path(self.store.get("fog_path"))

    def fog_config(self) -> dict[str, dict[str, Any]]:
        """Load the fog file once per run."""
        if self._fog_config is None:
            path = self.fog_path
            self._fog_config = load_fog_config(path)
            self.terminal.say(
                f"Found infrastructure API credentials at {path} (override with --fog)"
            )
        return self._fog_config

    def catalog(self) -> list[ProviderOption]:
        """Parse the fog profiles into provider options once per run."""
        if self._catalog is None:
            self._catalog = parse_profiles(self.fog_config())
        return self._catalog
