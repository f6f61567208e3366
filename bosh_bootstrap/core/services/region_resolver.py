"""
Region resolver — provider-specific choice of region / data center.

The chosen region is written in two places. Fog API calls read
``fog_credentials.region``; the micro BOSH deployer reads the endpoint
in ``bosh_cloud_properties``. Providers without a region concept are
left alone; an unknown provider is an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from bosh_bootstrap.adapters.base import Terminal
from bosh_bootstrap.core.errors import UnsupportedProviderError
from bosh_bootstrap.core.models.provider import ProviderKind
from bosh_bootstrap.core.persistence.settings_file import SettingsStore

logger = logging.getLogger(__name__)

# fog has no call that lists these
AWS_REGIONS = [
    "ap-northeast-1",
    "ap-southeast-1",
    "eu-west-1",
    "us-east-1",
    "us-west-1",
    "us-west-2",
    "sa-east-1",
]


def aws_ec2_endpoint(region: str) -> str:
    return f"ec2.{region}.amazonaws.com"


def _apply_aws_region(store: SettingsStore, region: str) -> None:
    cloud_properties = dict(store.get("bosh_cloud_properties", {}))
    aws = dict(cloud_properties.get("aws", {}))
    aws["ec2_endpoint"] = aws_ec2_endpoint(region)
    cloud_properties["aws"] = aws
    store.set("bosh_cloud_properties", cloud_properties)


@dataclass(frozen=True)
class RegionChoice:
    """How a provider offers regions and folds the answer back."""

    prompt: str
    regions: list[str]
    apply: Callable[[SettingsStore, str], None]


# None marks a known provider without regions
_REGION_CHOICES: dict[str, RegionChoice | None] = {
    ProviderKind.AWS.value: RegionChoice(
        prompt="Choose AWS region:",
        regions=AWS_REGIONS,
        apply=_apply_aws_region,
    ),
}


def _region_choice(provider: str) -> RegionChoice | None:
    if provider not in _REGION_CHOICES:
        raise UnsupportedProviderError(provider, what="Region selection")
    return _REGION_CHOICES[provider]


def regions_for(provider: str) -> list[str]:
    """Valid region codes for a provider (empty when it has none).

    Raises:
        UnsupportedProviderError: If the provider is unknown.
    """
    choice = _region_choice(provider)
    return list(choice.regions) if choice else []


def choose_provider_region(
    provider: str,
    terminal: Terminal,
    store: SettingsStore,
) -> str | None:
    """Ask for a region when the provider has them, and persist it.

    Returns:
        The chosen region code, or None for providers without regions.

    Raises:
        UnsupportedProviderError: If the provider is unknown.
    """
    choice = _region_choice(provider)
    if choice is None:
        logger.debug("Provider %s has no region concept", provider)
        return None

    region = terminal.choose(choice.prompt, list(choice.regions))

    credentials = store.get("fog_credentials")
    store.set("region_code", region)
    store.set("fog_credentials", credentials.model_copy(update={"region": region}))
    choice.apply(store, region)
    store.flush()

    logger.info("Selected %s region %s", provider, region)
    return region
