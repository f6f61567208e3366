"""
Provider catalog — turn fog profiles into labeled infrastructure choices.

A profile is offered only when it carries the fields that identify a
known provider. Everything else in the fog file is silently skipped.
"""

from __future__ import annotations

import logging
from typing import Any

from bosh_bootstrap.core.errors import ConfigError
from bosh_bootstrap.core.models.provider import ProviderKind, ProviderOption

logger = logging.getLogger(__name__)

# Field that identifies a provider → fields copied into the credentials.
# Checked in order; the first match wins.
_DETECTORS: list[tuple[ProviderKind, str, tuple[str, ...]]] = [
    (
        ProviderKind.AWS,
        "aws_access_key_id",
        ("aws_access_key_id", "aws_secret_access_key"),
    ),
]


def detect_provider(fields: dict[str, Any]) -> ProviderKind | None:
    """Return the provider kind a credential mapping belongs to, if any."""
    for kind, marker, _ in _DETECTORS:
        if fields.get(marker):
            return kind
    return None


def _credential_fields(kind: ProviderKind, fields: dict[str, Any]) -> dict[str, Any]:
    for detector_kind, _, wanted in _DETECTORS:
        if detector_kind is kind:
            return {name: fields.get(name) for name in wanted}
    return {}


def parse_profiles(raw_profiles: dict[str, dict[str, Any]]) -> list[ProviderOption]:
    """Build the ordered provider catalog from fog profiles.

    Labels look like ``"AWS (default)"``. Source order is kept, and two
    profiles that would produce the same label collapse into the first.

    Raises:
        ConfigError: If no profile belongs to a known provider.
    """
    options: list[ProviderOption] = []
    seen: set[str] = set()

    for profile, fields in raw_profiles.items():
        kind = detect_provider(fields)
        if kind is None:
            logger.debug("Skipping fog profile %r: no known provider fields", profile)
            continue

        label = f"{kind.display_name} ({profile})"
        if label in seen:
            continue
        seen.add(label)

        options.append(ProviderOption(
            label=label,
            kind=kind,
            profile=profile,
            credentials=_credential_fields(kind, fields),
        ))

    if not options:
        supported = ", ".join(k.display_name for k, _, _ in _DETECTORS)
        raise ConfigError(
            "No infrastructure provider credentials found in fog configuration",
            hint=f"Add a profile for a supported provider ({supported}).",
        )

    logger.info("Found %d infrastructure option(s)", len(options))
    return options
