"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest
import yaml

from bosh_bootstrap.adapters.base import Terminal
from bosh_bootstrap.adapters.mock import MockRunner
from bosh_bootstrap.core.context import WizardContext
from bosh_bootstrap.core.persistence.settings_file import SettingsStore


class ScriptedTerminal(Terminal):
    """Terminal double that answers prompts from a script.

    ``choices`` are menu labels, ``answers`` free-text replies and
    ``secrets`` masked replies. Running out of script fails the test.
    """

    def __init__(self, choices=None, answers=None, secrets=None):
        self.choices = list(choices or [])
        self.answers = list(answers or [])
        self.secrets = list(secrets or [])
        self.prompts: list[str] = []
        self.menus: list[list[str]] = []
        self.lines: list[str] = []

    def choose(self, prompt, choices):
        self.prompts.append(prompt)
        self.menus.append(list(choices))
        assert self.choices, f"unexpected menu: {prompt}"
        answer = self.choices.pop(0)
        assert answer in choices
        return answer

    def ask(self, prompt, default=None):
        self.prompts.append(prompt)
        assert self.answers, f"unexpected prompt: {prompt}"
        answer = self.answers.pop(0)
        return default if answer == "" else answer

    def ask_secret(self, prompt):
        self.prompts.append(prompt)
        assert self.secrets, f"unexpected secret prompt: {prompt}"
        return self.secrets.pop(0)

    def say(self, message="", color=None):
        self.lines.append(message)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


def fake_hash(password: str) -> str:
    return f"$6$testsalt${password[::-1]}"


def write_fog(path: Path, profiles: dict) -> Path:
    path.write_text(yaml.safe_dump(profiles, sort_keys=False))
    return path


@pytest.fixture
def settings_home(tmp_path: Path, monkeypatch) -> Path:
    """Point the per-user settings directory at a temp dir."""
    home = tmp_path / "bosh_bootstrap_home"
    monkeypatch.setenv("BOSH_BOOTSTRAP_HOME", str(home))
    return home


@pytest.fixture
def store(settings_home: Path) -> SettingsStore:
    return SettingsStore()


@pytest.fixture
def terminal() -> ScriptedTerminal:
    return ScriptedTerminal()


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner(runner_name="local")


@pytest.fixture
def fog_single(tmp_path: Path) -> Path:
    return write_fog(tmp_path / "fog_single.yml", {
        ":default": {
            ":aws_access_key_id": "PERSONAL_ACCESS_KEY",
            ":aws_secret_access_key": "PERSONAL_SECRET",
        },
    })


@pytest.fixture
def fog_multi(tmp_path: Path) -> Path:
    return write_fog(tmp_path / "fog_multi.yml", {
        "default": {"aws_access_key_id": "A", "aws_secret_access_key": "B"},
        "ops": {"aws_access_key_id": "C", "aws_secret_access_key": "D"},
    })


@pytest.fixture
def make_ctx(store: SettingsStore, terminal: ScriptedTerminal, runner: MockRunner):
    """Build a WizardContext with fakes for every external lookup."""
    calls = {"hash": 0, "stemcell": 0}

    def hash_password(password: str) -> str:
        calls["hash"] += 1
        return fake_hash(password)

    def find_stemcell(provider: str) -> str:
        calls["stemcell"] += 1
        return f"micro-bosh-stemcell-{provider}-0.6.4.tgz"

    def _make(fog_path: Path | None = None) -> WizardContext:
        if fog_path is not None:
            store.set("fog_path", str(fog_path))
        ctx = WizardContext(
            store=store,
            terminal=terminal,
            runner=runner,
            hash_password=hash_password,
            find_stemcell=find_stemcell,
        )
        ctx.calls = calls  # type: ignore[attr-defined]
        return ctx

    return _make
