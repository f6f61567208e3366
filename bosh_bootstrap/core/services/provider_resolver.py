"""
Provider resolver — settle on one infrastructure provider and derive
what the micro BOSH deployer needs to know about it.

Derivation is a closed dispatch keyed on provider name. A provider with
no branch fails loudly: guessing cloud properties for an unknown
infrastructure would deploy with wrong defaults.

At the end, settings hold:

    fog_credentials:                    {provider: AWS, aws_access_key_id: ..., ...}
    bosh_cloud_properties:              {aws: {access_key_id: ..., default_key_name: microbosh, ...}}
    bosh_resources_cloud_properties:    {instance_type: m1.medium}
    bosh_provider:                      aws
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from bosh_bootstrap.adapters.base import Terminal
from bosh_bootstrap.core.errors import UnsupportedProviderError
from bosh_bootstrap.core.models.provider import ProviderKind, ProviderOption
from bosh_bootstrap.core.models.settings import FogCredentials
from bosh_bootstrap.core.persistence.settings_file import SettingsStore

logger = logging.getLogger(__name__)

CHOOSE_PROMPT = "Choose infrastructure:"

MICROBOSH_KEY_NAME = "microbosh"
MICROBOSH_PRIVATE_KEY = "/home/vcap/.ssh/microbosh.pem"


def choose_provider(catalog: list[ProviderOption], terminal: Terminal) -> ProviderOption:
    """Pick one option, asking the operator only when there is a choice."""
    if len(catalog) == 1:
        logger.info("Only one infrastructure option, using %s", catalog[0].label)
        return catalog[0]

    labels = [option.label for option in catalog]
    label = terminal.choose(CHOOSE_PROMPT, labels)
    return catalog[labels.index(label)]


def resolve_credentials(option: ProviderOption) -> FogCredentials:
    """Turn a catalog entry into credentials with a normalized provider."""
    return FogCredentials(provider=option.kind.value, **option.credentials)


# ── Cloud properties ─────────────────────────────────────────────


def _aws_cloud_properties(credentials: FogCredentials) -> dict[str, dict[str, Any]]:
    # ec2_endpoint is added once a region is chosen
    return {
        "aws": {
            "access_key_id": credentials.field("aws_access_key_id"),
            "secret_access_key": credentials.field("aws_secret_access_key"),
            "default_key_name": MICROBOSH_KEY_NAME,
            "default_security_groups": [MICROBOSH_KEY_NAME],
            "ec2_private_key": MICROBOSH_PRIVATE_KEY,
        }
    }


def _aws_resources_cloud_properties(credentials: FogCredentials) -> dict[str, Any]:
    return {"instance_type": "m1.medium"}


_CLOUD_PROPERTIES: dict[str, Callable[[FogCredentials], dict[str, dict[str, Any]]]] = {
    ProviderKind.AWS.value: _aws_cloud_properties,
}

_RESOURCES_CLOUD_PROPERTIES: dict[str, Callable[[FogCredentials], dict[str, Any]]] = {
    ProviderKind.AWS.value: _aws_resources_cloud_properties,
}


def ensure_supported(provider: str) -> None:
    """Fail unless BOSH properties can be derived for ``provider``.

    Covers providers read back from the settings file, which never went
    through the catalog.

    Raises:
        UnsupportedProviderError: If the provider has no implementation.
    """
    if provider not in _CLOUD_PROPERTIES or provider not in _RESOURCES_CLOUD_PROPERTIES:
        raise UnsupportedProviderError(provider)


def bosh_cloud_properties(credentials: FogCredentials) -> dict[str, dict[str, Any]]:
    """Cloud properties for the micro BOSH deployment manifest.

    Raises:
        UnsupportedProviderError: If the provider has no implementation.
    """
    derive = _CLOUD_PROPERTIES.get(credentials.provider)
    if derive is None:
        raise UnsupportedProviderError(credentials.provider, what="BOSH cloud properties")
    return derive(credentials)


def bosh_resources_cloud_properties(credentials: FogCredentials) -> dict[str, Any]:
    """Instance sizing for the micro BOSH VM.

    Raises:
        UnsupportedProviderError: If the provider has no implementation.
    """
    derive = _RESOURCES_CLOUD_PROPERTIES.get(credentials.provider)
    if derive is None:
        raise UnsupportedProviderError(credentials.provider, what="BOSH resource properties")
    return derive(credentials)


def choose_fog_provider(
    catalog: list[ProviderOption],
    terminal: Terminal,
    store: SettingsStore,
) -> FogCredentials:
    """Select credentials and persist them with their derived properties.

    Nothing is written until every property has been derived, so an
    unsupported provider leaves the settings untouched.
    """
    option = choose_provider(catalog, terminal)
    credentials = resolve_credentials(option)

    cloud_properties = bosh_cloud_properties(credentials)
    resources = bosh_resources_cloud_properties(credentials)

    store.set("fog_credentials", credentials)
    store.set("bosh_cloud_properties", cloud_properties)
    store.set("bosh_resources_cloud_properties", resources)
    store.set("bosh_provider", next(iter(cloud_properties)))  # aws, vsphere...
    store.flush()

    logger.info("Selected %s", option.label)
    return credentials
