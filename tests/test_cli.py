"""
Tests for CLI commands — local, remote, and global options.
"""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from bosh_bootstrap import main as main_module
from bosh_bootstrap.adapters.mock import MockRunner
from bosh_bootstrap.adapters.shell import tools
from bosh_bootstrap.main import cli

CONFIGURED = {
    "fog_credentials": {
        "provider": "AWS",
        "aws_access_key_id": "A",
        "aws_secret_access_key": "B",
        "region": "us-east-1",
    },
    "bosh_cloud_properties": {"aws": {"access_key_id": "A", "secret_access_key": "B"}},
    "bosh_resources_cloud_properties": {"instance_type": "m1.medium"},
    "bosh_provider": "aws",
    "region_code": "us-east-1",
    "bosh_username": "admin",
    "bosh_password": "s3cret",
    "micro_bosh_stemcell_name": "micro-bosh-stemcell-aws-0.6.4.tgz",
}


@pytest.fixture
def fake_tools(monkeypatch):
    monkeypatch.setattr(tools, "salted_password", lambda p: "$6$salt$hashed")
    monkeypatch.setattr(tools, "latest_micro_stemcell", lambda provider: f"micro-{provider}.tgz")


def _write_settings(settings_home: Path, data: dict) -> Path:
    settings_home.mkdir(parents=True, exist_ok=True)
    path = settings_home / "manifest.yml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "local" in result.output
        assert "remote" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_command_options(self):
        result = CliRunner().invoke(cli, ["local", "--help"])
        assert "--fog" in result.output
        assert "--upgrade-deps" in result.output


class TestRemoteCommand:
    def test_configured_settings_complete_without_prompts(self, settings_home, fake_tools, tmp_path):
        path = _write_settings(settings_home, CONFIGURED)
        result = CliRunner().invoke(cli, ["remote", "--fog", str(tmp_path / "fog")])
        assert result.exit_code == 0, result.output
        assert "Skipping Stage 1: Choose infrastructure" in result.output
        assert "Micro BOSH will be created with stemcell micro-bosh-stemcell-aws-0.6.4.tgz" in result.output

        data = yaml.safe_load(path.read_text())
        assert data["bosh"]["salted_password"] == "$6$salt$hashed"
        assert data["bosh"]["persistent_disk"] == 16384

    def test_missing_fog_file(self, settings_home, tmp_path):
        fog = tmp_path / "no-such-fog"
        result = CliRunner().invoke(cli, ["remote", "--fog", str(fog)])
        assert result.exit_code == 1
        assert "Stage 1: Choose infrastructure" in result.output
        assert str(fog.resolve()) in result.output

    def test_prompt_without_terminal_fails_fast(self, settings_home, tmp_path):
        fog = tmp_path / "fog"
        fog.write_text(
            "default:\n  aws_access_key_id: A\n  aws_secret_access_key: B\n"
            "ops:\n  aws_access_key_id: C\n  aws_secret_access_key: D\n"
        )
        result = CliRunner().invoke(cli, ["remote", "--fog", str(fog)])
        assert result.exit_code == 1
        assert "interactive terminal" in result.output

    def test_malformed_settings(self, settings_home):
        settings_home.mkdir(parents=True)
        (settings_home / "manifest.yml").write_text("bosh_username: [oops\n")
        result = CliRunner().invoke(cli, ["remote"])
        assert result.exit_code == 1
        first_line = result.output.splitlines()[0]
        assert first_line.startswith("❌ Loading options: Invalid YAML in settings file")

    def test_uncreatable_settings_names_stage(self, settings_home):
        settings_home.parent.mkdir(parents=True, exist_ok=True)
        settings_home.write_text("not a directory")
        result = CliRunner().invoke(cli, ["remote"])
        assert result.exit_code == 1
        assert result.output.startswith("❌ Loading options: Cannot create settings file")


class TestLocalCommand:
    def test_runs_provisioning_stages(self, settings_home, fake_tools, monkeypatch, tmp_path):
        runner = MockRunner(runner_name="local")
        monkeypatch.setattr(main_module, "LocalServer", lambda: runner)
        _write_settings(settings_home, CONFIGURED)

        result = CliRunner().invoke(cli, ["local", "--fog", str(tmp_path / "fog"), "--upgrade-deps"])
        assert result.exit_code == 0, result.output
        assert "Skipping Stage 3: Create the Inception VM" in result.output
        ids = [c.id for c in runner.call_log]
        assert "apt-upgrade" in ids
        assert ids[-1] == "micro-deploy"

    def test_failed_stage_exits_nonzero(self, settings_home, fake_tools, monkeypatch, tmp_path):
        runner = MockRunner(runner_name="local")
        runner.set_failure("micro-deploy")
        monkeypatch.setattr(main_module, "LocalServer", lambda: runner)
        _write_settings(settings_home, CONFIGURED)

        result = CliRunner().invoke(cli, ["local", "--fog", str(tmp_path / "fog")])
        assert result.exit_code == 1
        assert "Failed to complete Stage 5: Deploying micro BOSH" in result.output
        assert "Command micro-deploy failed: Mock failure" in result.output
