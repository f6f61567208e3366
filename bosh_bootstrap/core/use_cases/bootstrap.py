"""
Bootstrap use case — the staged wizard from fog credentials to micro BOSH.

    Stage 1: Choose infrastructure      provider, credentials, region
    Stage 2: BOSH configuration         username/password, salted hash, stemcell
    Stage 3: Create the Inception VM    (skipped: local mode only)
    Stage 4: Preparing the Inception VM command runner
    Stage 5: Deploying micro BOSH       command runner

Every sub-step checks the settings before doing anything and flushes its
answer before the next prompt. A run interrupted anywhere resumes at the
first sub-step whose fact is still missing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from bosh_bootstrap.adapters.base import Terminal
from bosh_bootstrap.adapters.shell.command import LocalServer
from bosh_bootstrap.core.config.loader import resolve_fog_path
from bosh_bootstrap.core.context import WizardContext
from bosh_bootstrap.core.errors import SettingsError, StageFailedError, WizardError
from bosh_bootstrap.core.persistence.settings_file import SettingsStore
from bosh_bootstrap.core.services.credentials import (
    build_bosh_settings,
    prompt_for_bosh_credentials,
    record_bosh_credentials,
)
from bosh_bootstrap.core.services.deploy_stages import (
    MicroBoshDeploy,
    StagePrepareInceptionVm,
)
from bosh_bootstrap.core.services.provider_resolver import choose_fog_provider, ensure_supported
from bosh_bootstrap.core.services.region_resolver import choose_provider_region

logger = logging.getLogger(__name__)

OPTIONS_STAGE = "Loading options"
STAGE_1 = "Stage 1: Choose infrastructure"
STAGE_2 = "Stage 2: BOSH configuration"
STAGE_3 = "Stage 3: Create the Inception VM"


class BootstrapWizard:
    """Runs the bootstrap stages against one settings store."""

    def __init__(self, ctx: WizardContext):
        self.ctx = ctx

    @property
    def store(self) -> SettingsStore:
        return self.ctx.store

    @property
    def terminal(self) -> Terminal:
        return self.ctx.terminal

    @contextmanager
    def _stage(self, title: str) -> Iterator[None]:
        """Tag any wizard failure with the stage it happened in."""
        try:
            yield
        except WizardError as e:
            if e.stage is None:
                e.stage = title
            logger.debug("%s failed: %s", title, e.message)
            raise

    # ── Options ──────────────────────────────────────────────────

    def load_options(self, fog: str | None = None, upgrade_deps: bool = False) -> None:
        """Record command-line options in the settings."""
        with self._stage(OPTIONS_STAGE):
            self.store.set("fog_path", str(resolve_fog_path(fog)))
            if upgrade_deps:
                self.store.set("upgrade_deps", True)
            else:
                self.store.delete("upgrade_deps")
            self.store.flush()

    # ── Stage 1 ──────────────────────────────────────────────────

    def stage_1_choose_infrastructure_provider(self) -> None:
        with self._stage(STAGE_1):
            if self.store.has("fog_credentials"):
                self.terminal.header(STAGE_1, skipping="Already selected infrastructure provider")
            else:
                self.terminal.header(STAGE_1)
                choose_fog_provider(self.ctx.catalog(), self.terminal, self.store)

            provider = self.store.get("fog_credentials").provider
            ensure_supported(provider)
            self.terminal.confirm(f"Using {provider} infrastructure provider.")

            if not self.store.has("region_code"):
                choose_provider_region(provider, self.terminal, self.store)

            region = self.store.get("region_code")
            if region:
                self.terminal.confirm(f"Using {provider} {region} region.")
            else:
                self.terminal.confirm(f"No specific region/data center for {provider}")

    # ── Stage 2 ──────────────────────────────────────────────────

    def stage_2_bosh_configuration(self) -> None:
        with self._stage(STAGE_2):
            self.terminal.header(STAGE_2)

            if not self.store.has("bosh_username"):
                record_bosh_credentials(self.store, prompt_for_bosh_credentials(self.terminal))
            username = self.store.get("bosh_username")
            self.terminal.confirm(f"After BOSH is created, your username will be {username}")

            self.store.set("bosh", build_bosh_settings(self.store, self.ctx.hash_password))
            self.store.flush()

            if not self.store.has("micro_bosh_stemcell_name"):
                self.store.set("micro_bosh_stemcell_name", self._micro_bosh_stemcell_name())
                self.store.flush()

            stemcell = self.store.get("micro_bosh_stemcell_name")
            self.terminal.confirm(f"Micro BOSH will be created with stemcell {stemcell}")

    def _micro_bosh_stemcell_name(self) -> str:
        provider = self.store.get("bosh_provider")
        if provider is None:
            raise SettingsError(
                "No bosh_provider in settings",
                hint="Remove fog_credentials from the settings manifest and run again.",
            )
        self.terminal.say(f"Locating latest stable micro-bosh stemcell for {provider}...")
        return self.ctx.find_stemcell(provider)

    # ── Stages 4 & 5 ─────────────────────────────────────────────

    def _provision(self, stage: StagePrepareInceptionVm | MicroBoshDeploy) -> None:
        self.terminal.header(stage.title)
        with self._stage(stage.title):
            commands = stage.commands
            runner = self.ctx.runner or LocalServer()
            if not runner.is_available():
                raise StageFailedError(f"The {runner.name} command runner is not available")
            logger.info("%s: %d command(s) on %s", stage.title, len(commands), runner.name)
            if not runner.run(commands):
                failure = runner.first_failure
                hint = f"Command {failure.command_id} failed: {failure.error}" if failure else None
                raise StageFailedError(f"Failed to complete {stage.title}", hint=hint)

    def stage_4_prepare_inception_vm(self) -> None:
        self._provision(StagePrepareInceptionVm(self.store.settings))

    def stage_5_deploy_micro_bosh(self) -> None:
        self._provision(MicroBoshDeploy(self.store.settings))

    # ── Workflows ────────────────────────────────────────────────

    def run_local(self, fog: str | None = None, upgrade_deps: bool = False) -> None:
        """Bootstrap using this machine as the inception VM."""
        self.load_options(fog=fog, upgrade_deps=upgrade_deps)
        self.stage_1_choose_infrastructure_provider()
        self.stage_2_bosh_configuration()
        self.terminal.header(
            STAGE_3, skipping="Running in local mode instead. This is the Inception VM. POW!",
        )
        self.stage_4_prepare_inception_vm()
        self.stage_5_deploy_micro_bosh()

    def run_remote(self, fog: str | None = None, upgrade_deps: bool = False) -> None:
        """Choose infrastructure and configure BOSH for a remote inception VM."""
        self.load_options(fog=fog, upgrade_deps=upgrade_deps)
        self.stage_1_choose_infrastructure_provider()
        self.stage_2_bosh_configuration()
