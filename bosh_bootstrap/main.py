"""
bosh-bootstrap — CLI entrypoint.

Usage:
    bosh-bootstrap --help
    bosh-bootstrap local  [--fog PATH] [--upgrade-deps]
    bosh-bootstrap remote [--fog PATH] [--upgrade-deps]
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable

import click

from bosh_bootstrap import __version__
from bosh_bootstrap.adapters.base import CommandRunner
from bosh_bootstrap.adapters.shell import tools
from bosh_bootstrap.adapters.shell.command import LocalServer
from bosh_bootstrap.adapters.terminal import ClickTerminal
from bosh_bootstrap.core.context import WizardContext
from bosh_bootstrap.core.errors import WizardError
from bosh_bootstrap.core.observability.logging_config import setup_logging
from bosh_bootstrap.core.persistence.settings_file import SettingsStore
from bosh_bootstrap.core.use_cases.bootstrap import OPTIONS_STAGE, BootstrapWizard

logger = logging.getLogger(__name__)

fog_option = click.option(
    "--fog",
    "fog",
    type=click.Path(dir_okay=False),
    default=None,
    help="fog config file (default: ~/.fog)",
)
upgrade_deps_option = click.option(
    "--upgrade-deps",
    "upgrade_deps",
    is_flag=True,
    help="Force upgrade dependencies, packages & gems",
)


@click.group()
@click.version_option(version=__version__, prog_name="bosh-bootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(verbose: bool, quiet: bool, debug: bool) -> None:
    """bosh-bootstrap — stand up a micro BOSH from your fog credentials."""
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("BOSH_BOOTSTRAP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("BOSH_BOOTSTRAP_LOG_FILE"),
        log_file_level=os.environ.get("BOSH_BOOTSTRAP_LOG_FILE_LEVEL"),
    )


def _run_wizard(
    workflow: Callable[[BootstrapWizard], None],
    runner: CommandRunner | None = None,
) -> None:
    """Build the wizard context, run a workflow, and report fatal errors.

    Opening the settings manifest belongs to the options stage; every
    later stage tags its own errors.
    """
    try:
        ctx = WizardContext(
            store=SettingsStore(),
            terminal=ClickTerminal(),
            runner=runner,
            hash_password=tools.salted_password,
            find_stemcell=tools.latest_micro_stemcell,
        )
        workflow(BootstrapWizard(ctx))
    except WizardError as e:
        stage = e.stage or OPTIONS_STAGE
        click.secho(f"❌ {stage}: {e.message}", fg="red")
        if e.hint:
            click.echo(f"   {e.hint}")
        logger.debug("Wizard aborted", exc_info=True)
        sys.exit(1)


@cli.command()
@fog_option
@upgrade_deps_option
def local(fog: str | None, upgrade_deps: bool) -> None:
    """Bootstrap bosh, using local server as inception VM"""
    _run_wizard(
        lambda wizard: wizard.run_local(fog=fog, upgrade_deps=upgrade_deps),
        runner=LocalServer(),
    )


@cli.command()
@fog_option
@upgrade_deps_option
def remote(fog: str | None, upgrade_deps: bool) -> None:
    """Choose infrastructure and configure bosh for a remote inception VM"""
    _run_wizard(lambda wizard: wizard.run_remote(fog=fog, upgrade_deps=upgrade_deps))


if __name__ == "__main__":
    cli()
