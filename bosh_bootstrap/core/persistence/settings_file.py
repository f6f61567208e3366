"""
Settings file persistence — the wizard's memory between runs.

Settings are stored as YAML in ~/.bosh_bootstrap/manifest.yml. The file
is created (as an empty mapping) on first access and restricted to the
owning user. Writes are atomic (write to temp file, then rename) so a
crash mid-write never leaves a half-written manifest behind.

Unlike most state files, a manifest that cannot be parsed is NOT
replaced with a fresh one: it holds the operator's earlier answers.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from bosh_bootstrap.core.errors import SettingsError
from bosh_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_DIR = ".bosh_bootstrap"
DEFAULT_SETTINGS_FILE = "manifest.yml"
SETTINGS_HOME_ENV = "BOSH_BOOTSTRAP_HOME"

FILE_MODE = 0o600


def default_settings_path() -> Path:
    """Get the per-user settings path.

    ``$BOSH_BOOTSTRAP_HOME/manifest.yml`` when the variable is set,
    otherwise ``~/.bosh_bootstrap/manifest.yml``.
    """
    override = os.environ.get(SETTINGS_HOME_ENV, "").strip()
    if override:
        return Path(override).expanduser() / DEFAULT_SETTINGS_FILE
    return Path.home() / DEFAULT_SETTINGS_DIR / DEFAULT_SETTINGS_FILE


def _render(settings: Settings) -> str:
    return yaml.safe_dump(
        settings.to_document(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML manifest.

    Args:
        path: Path to the manifest.

    Returns:
        Settings model. A missing or empty file yields empty settings.

    Raises:
        SettingsError: If the file cannot be read, is not valid YAML,
            is not a mapping, or holds values of the wrong shape.
    """
    if not path.is_file():
        logger.info("No settings file at %s, starting fresh", path)
        return Settings()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e

    hint = f"Fix or remove {path} and run again."
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file {path}: {e}", hint=hint) from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise SettingsError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}", hint=hint,
        )

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {path}: {e}", hint=hint) from e

    logger.debug("Loaded settings from %s (%d keys)", path, len(data))
    return settings


def save_settings(settings: Settings, path: Path) -> None:
    """Save settings to the manifest (atomic write, mode 0600).

    Raises:
        SettingsError: If the directory or file cannot be written.
    """
    content = _render(settings)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".manifest_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp, FILE_MODE)
            os.replace(tmp, path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save settings to %s: %s", path, e)
        raise SettingsError(f"Cannot write settings file {path}: {e}") from e

    logger.debug("Settings saved to %s", path)


class SettingsStore:
    """Key/value view over the settings manifest.

    The store is the single source of truth for what has already been
    decided. Callers ``set`` a fact and then ``flush`` so that it
    survives an interrupted run.
    """

    def __init__(self, path: Path | None = None):
        self.path = path or default_settings_path()
        self._prepare_file()
        self.settings = load_settings(self.path)

    def _prepare_file(self) -> None:
        """Create the manifest as an empty mapping and lock down its mode."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text(yaml.safe_dump({}), encoding="utf-8")
                logger.info("Created settings file %s", self.path)
            os.chmod(self.path, FILE_MODE)
        except OSError as e:
            raise SettingsError(
                f"Cannot create settings file {self.path}: {e}",
                hint=f"Check permissions on {self.path.parent}.",
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default`` when absent."""
        value = getattr(self.settings, key, None)
        return default if value is None else value

    def has(self, key: str) -> bool:
        """Whether ``key`` is a known fact."""
        return self.get(key) is not None

    def set(self, key: str, value: Any) -> None:
        """Record a fact. Values are validated against the Settings model."""
        try:
            setattr(self.settings, key, value)
        except ValidationError as e:
            raise SettingsError(f"Invalid value for setting {key!r}: {e}") from e

    def delete(self, key: str) -> None:
        """Forget a fact."""
        if key in Settings.model_fields:
            setattr(self.settings, key, None)
        elif self.settings.model_extra:
            self.settings.model_extra.pop(key, None)

    def flush(self) -> None:
        """Durably persist the full current state."""
        save_settings(self.settings, self.path)

    def to_dict(self) -> dict[str, Any]:
        return self.settings.to_document()
