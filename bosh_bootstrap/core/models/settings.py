"""
Settings — the persisted record of everything the wizard has decided.

Serialized to ~/.bosh_bootstrap/manifest.yml and reloaded on every run.
Each optional field is one fact; a field that is None has not been
learned yet and is omitted from the file. The presence of a field is
the only signal the stages use to decide whether to skip a step.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

# Fixed until the wizard provisions a real address for the micro BOSH
PLACEHOLDER_IP_ADDRESS = "2.3.4.5"
PERSISTENT_DISK_MB = 16384


class FogCredentials(BaseModel):
    """The chosen fog profile plus its normalized provider name.

    Raw credential fields vary per provider and are kept as extras.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    provider: str
    region: str | None = None

    def field(self, name: str) -> Any:
        """Return a raw credential field (e.g. aws_access_key_id)."""
        return (self.model_extra or {}).get(name)


class BoshSettings(BaseModel):
    """Credentials and sizing for the micro BOSH being deployed."""

    ip_address: str = PLACEHOLDER_IP_ADDRESS
    password: str
    salted_password: str
    persistent_disk: int = PERSISTENT_DISK_MB


class Settings(BaseModel):
    """Root settings document.

    Unknown keys found in the manifest are preserved so that hand edits
    and downstream additions survive a round-trip.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    # ── Options ──────────────────────────────────────────────────
    fog_path: str | None = None
    upgrade_deps: bool | None = None

    # ── Stage 1: infrastructure provider ─────────────────────────
    fog_credentials: FogCredentials | None = None
    bosh_cloud_properties: dict[str, dict[str, Any]] | None = None
    bosh_resources_cloud_properties: dict[str, Any] | None = None
    bosh_provider: str | None = None
    region_code: str | None = None

    # ── Stage 2: BOSH configuration ──────────────────────────────
    bosh_username: str | None = None
    bosh_password: str | None = None
    bosh: BoshSettings | None = None
    micro_bosh_stemcell_name: str | None = None

    def to_document(self) -> dict[str, Any]:
        """Plain mapping for YAML output. Unset facts are omitted."""
        return self.model_dump(mode="json", exclude_none=True)

