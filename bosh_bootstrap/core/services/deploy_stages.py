"""
Provisioning stages — command lists handed to the command runner.

    Stage 4: Preparing the Inception VM   → system packages + BOSH CLI gems
    Stage 5: Deploying micro BOSH         → micro_bosh.yml + bosh micro deploy

Both are built purely from settings; nothing here runs a command.
"""

from __future__ import annotations

import shlex
from typing import Any

import yaml

from bosh_bootstrap.core.errors import SettingsError
from bosh_bootstrap.core.models.command import Command
from bosh_bootstrap.core.models.settings import Settings

DEPLOYMENTS_DIR = "$HOME/microboshes/deployments"

APT_PACKAGES = [
    "build-essential",
    "libsqlite3-dev",
    "curl",
    "rsync",
    "git-core",
    "libmysqlclient-dev",
    "libxml2-dev",
    "libxslt-dev",
    "libpq-dev",
    "genisoimage",
    "whois",  # provides mkpasswd
]

BOSH_GEMS = ["bosh_cli", "bosh_deployer"]


def _require(settings: Settings, *keys: str) -> None:
    missing = [k for k in keys if getattr(settings, k, None) is None]
    if missing:
        raise SettingsError(
            f"Settings are missing {', '.join(missing)}",
            hint="Run stages 1 and 2 first (bosh-bootstrap remote).",
        )


class StagePrepareInceptionVm:
    """Install what the inception VM needs to deploy a micro BOSH."""

    title = "Stage 4: Preparing the Inception VM"

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def commands(self) -> list[Command]:
        upgrade = bool(self.settings.upgrade_deps)
        commands = [
            Command(id="apt-update", description="Refresh package index",
                    command="sudo apt-get update"),
        ]
        if upgrade:
            commands.append(Command(
                id="apt-upgrade", description="Upgrade installed packages",
                command="sudo DEBIAN_FRONTEND=noninteractive apt-get upgrade -y",
            ))
        commands.append(Command(
            id="apt-install", description="Install build dependencies",
            command="sudo DEBIAN_FRONTEND=noninteractive apt-get install -y "
            + " ".join(APT_PACKAGES),
        ))
        gems = " ".join(BOSH_GEMS)
        commands.append(Command(
            id="gem-install", description="Install BOSH CLI and deployer",
            command=f"gem install {gems} --no-ri --no-rdoc",
        ))
        if upgrade:
            commands.append(Command(
                id="gem-update", description="Upgrade BOSH CLI and deployer",
                command=f"gem update {gems} --no-ri --no-rdoc",
            ))
        return commands


def micro_bosh_name(settings: Settings) -> str:
    """Deployment name, e.g. ``microbosh-aws-us-east-1``."""
    parts = ["microbosh", settings.bosh_provider or "unknown"]
    if settings.region_code:
        parts.append(settings.region_code)
    return "-".join(parts)


def render_micro_bosh_manifest(settings: Settings) -> dict[str, Any]:
    """The micro BOSH deployment manifest described by the settings."""
    _require(
        settings,
        "bosh_provider", "bosh_cloud_properties", "bosh_resources_cloud_properties", "bosh",
    )
    bosh = settings.bosh
    assert bosh is not None  # guaranteed by _require

    return {
        "name": micro_bosh_name(settings),
        "env": {"bosh": {"password": bosh.salted_password}},
        "logging": {"level": "DEBUG"},
        "network": {"type": "dynamic", "vip": bosh.ip_address},
        "resources": {
            "persistent_disk": bosh.persistent_disk,
            "cloud_properties": dict(settings.bosh_resources_cloud_properties or {}),
        },
        "cloud": {
            "plugin": settings.bosh_provider,
            "properties": dict(settings.bosh_cloud_properties or {}),
        },
    }


class MicroBoshDeploy:
    """Write the micro BOSH manifest and deploy it with the chosen stemcell."""

    title = "Stage 5: Deploying micro BOSH"

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def commands(self) -> list[Command]:
        _require(self.settings, "micro_bosh_stemcell_name")
        name = micro_bosh_name(self.settings)
        stemcell = shlex.quote(self.settings.micro_bosh_stemcell_name or "")
        deployment_dir = f"{DEPLOYMENTS_DIR}/{name}"
        manifest = yaml.safe_dump(
            render_micro_bosh_manifest(self.settings),
            default_flow_style=False,
            sort_keys=False,
        )
        in_deployments = f'cd "{DEPLOYMENTS_DIR}" && '

        return [
            Command(id="deployment-dir", description="Create deployment directory",
                    command=f'mkdir -p "{deployment_dir}"'),
            Command(id="write-manifest", description="Write micro_bosh.yml",
                    command=f"umask 077 && cat > \"{deployment_dir}/micro_bosh.yml\" <<'MANIFEST'\n"
                    f"{manifest}MANIFEST"),
            Command(id="download-stemcell", description="Download micro BOSH stemcell",
                    command=in_deployments
                    + f"([ -f {stemcell} ] || bosh download public stemcell {stemcell})"),
            Command(id="set-deployment", description="Select micro BOSH deployment",
                    command=in_deployments + f"bosh micro deployment {shlex.quote(name)}"),
            Command(id="micro-deploy", description="Deploy micro BOSH",
                    command=in_deployments + f"bosh -n micro deploy {stemcell}",
                    timeout=3600),
        ]
