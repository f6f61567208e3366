"""
Tests for the region resolver.
"""

import pytest

from bosh_bootstrap.core.errors import UnsupportedProviderError
from bosh_bootstrap.core.services import region_resolver
from bosh_bootstrap.core.services.provider_catalog import parse_profiles
from bosh_bootstrap.core.services.provider_resolver import choose_fog_provider
from bosh_bootstrap.core.services.region_resolver import (
    AWS_REGIONS,
    choose_provider_region,
    regions_for,
)

SINGLE = {"default": {"aws_access_key_id": "A", "aws_secret_access_key": "B"}}


class TestRegions:
    def test_aws_region_list_is_fixed_and_ordered(self):
        assert regions_for("AWS") == [
            "ap-northeast-1", "ap-southeast-1", "eu-west-1",
            "us-east-1", "us-west-1", "us-west-2", "sa-east-1",
        ]

    def test_provider_without_regions(self, monkeypatch):
        monkeypatch.setitem(region_resolver._REGION_CHOICES, "Rackspace", None)
        assert regions_for("Rackspace") == []

    def test_unknown_provider_is_unsupported(self):
        with pytest.raises(UnsupportedProviderError, match="vSphere"):
            regions_for("vSphere")


class TestChooseProviderRegion:
    def test_region_written_to_credentials_and_endpoint(self, store, terminal):
        choose_fog_provider(parse_profiles(SINGLE), terminal, store)
        terminal.choices = ["us-east-1"]

        region = choose_provider_region("AWS", terminal, store)

        assert region == "us-east-1"
        assert terminal.menus == [AWS_REGIONS]
        reloaded = type(store)(store.path)
        assert reloaded.get("region_code") == "us-east-1"
        assert reloaded.get("fog_credentials").region == "us-east-1"
        assert reloaded.get("fog_credentials").field("aws_access_key_id") == "A"
        aws = reloaded.get("bosh_cloud_properties")["aws"]
        assert aws["ec2_endpoint"] == "ec2.us-east-1.amazonaws.com"
        assert aws["default_key_name"] == "microbosh"

    def test_provider_without_regions_does_not_prompt(self, store, terminal, monkeypatch):
        monkeypatch.setitem(region_resolver._REGION_CHOICES, "Rackspace", None)
        assert choose_provider_region("Rackspace", terminal, store) is None
        assert terminal.prompts == []
        assert not store.has("region_code")

    def test_unknown_provider_fails_before_prompting(self, store, terminal):
        with pytest.raises(UnsupportedProviderError, match="Region selection"):
            choose_provider_region("vSphere", terminal, store)
        assert terminal.prompts == []
        assert terminal.menus == []
        assert not store.has("region_code")
