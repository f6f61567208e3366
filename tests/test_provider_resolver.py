"""
Tests for the provider resolver — selection plus property dispatch.
"""

import pytest

from bosh_bootstrap.core.errors import UnsupportedProviderError
from bosh_bootstrap.core.models.settings import FogCredentials
from bosh_bootstrap.core.services.provider_catalog import parse_profiles
from bosh_bootstrap.core.services.provider_resolver import (
    bosh_cloud_properties,
    bosh_resources_cloud_properties,
    choose_fog_provider,
    choose_provider,
    ensure_supported,
)

SINGLE = {"default": {"aws_access_key_id": "A", "aws_secret_access_key": "B"}}
MULTI = {
    "default": {"aws_access_key_id": "A", "aws_secret_access_key": "B"},
    "ops": {"aws_access_key_id": "C", "aws_secret_access_key": "D"},
}


class TestChooseProvider:
    def test_single_option_auto_selected(self, terminal):
        option = choose_provider(parse_profiles(SINGLE), terminal)
        assert option.label == "AWS (default)"
        assert terminal.prompts == []

    def test_multiple_options_prompt_in_catalog_order(self, terminal):
        terminal.choices = ["AWS (ops)"]
        option = choose_provider(parse_profiles(MULTI), terminal)
        assert option.profile == "ops"
        assert terminal.menus == [["AWS (default)", "AWS (ops)"]]


class TestCloudProperties:
    def test_aws_cloud_properties(self):
        creds = FogCredentials(provider="AWS", aws_access_key_id="A", aws_secret_access_key="B")
        assert bosh_cloud_properties(creds) == {
            "aws": {
                "access_key_id": "A",
                "secret_access_key": "B",
                "default_key_name": "microbosh",
                "default_security_groups": ["microbosh"],
                "ec2_private_key": "/home/vcap/.ssh/microbosh.pem",
            }
        }

    def test_aws_resources(self):
        creds = FogCredentials(provider="AWS", aws_access_key_id="A")
        assert bosh_resources_cloud_properties(creds) == {"instance_type": "m1.medium"}

    def test_unsupported_provider_cloud_properties(self):
        creds = FogCredentials(provider="OpenStack", openstack_api_key="k")
        with pytest.raises(UnsupportedProviderError) as exc:
            bosh_cloud_properties(creds)
        assert exc.value.provider == "OpenStack"
        assert "OpenStack" in str(exc.value)

    def test_unsupported_provider_resources(self):
        creds = FogCredentials(provider="vSphere")
        with pytest.raises(UnsupportedProviderError, match="vSphere"):
            bosh_resources_cloud_properties(creds)

    def test_ensure_supported_accepts_aws(self):
        ensure_supported("AWS")

    def test_ensure_supported_rejects_unknown(self):
        with pytest.raises(UnsupportedProviderError) as exc:
            ensure_supported("vSphere")
        assert exc.value.message == "Infrastructure provider 'vSphere' is not supported"
        assert exc.value.hint == "Only AWS is currently supported."


class TestChooseFogProvider:
    def test_persists_credentials_and_properties(self, store, terminal):
        choose_fog_provider(parse_profiles(SINGLE), terminal, store)

        reloaded = type(store)(store.path)
        creds = reloaded.get("fog_credentials")
        assert creds.provider == "AWS"
        assert creds.field("aws_access_key_id") == "A"
        assert creds.field("aws_secret_access_key") == "B"
        assert reloaded.get("bosh_cloud_properties")["aws"]["access_key_id"] == "A"
        assert reloaded.get("bosh_resources_cloud_properties") == {"instance_type": "m1.medium"}
        assert reloaded.get("bosh_provider") == "aws"

    def test_multi_profile_provider_is_normalized(self, store, terminal):
        terminal.choices = ["AWS (ops)"]
        creds = choose_fog_provider(parse_profiles(MULTI), terminal, store)
        assert creds.provider == "AWS"
        assert creds.field("aws_access_key_id") == "C"
