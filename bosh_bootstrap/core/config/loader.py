"""
Fog configuration loader — reads the infrastructure credential file.

The fog file maps profile names to credential fields:

    :default:
      :aws_access_key_id:     PERSONAL_ACCESS_KEY
      :aws_secret_access_key: PERSONAL_SECRET
    :bosh:
      :aws_access_key_id:     SPECIAL_IAM_ACCESS_KEY
      :aws_secret_access_key: SPECIAL_IAM_SECRET_KEY

Keys are often written as Ruby symbols; the leading colon is stripped
so ``:default`` and ``default`` resolve the same way.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from bosh_bootstrap.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_FOG_PATH = "~/.fog"


def resolve_fog_path(path: str | Path | None = None) -> Path:
    """Expand an explicit ``--fog`` path, or fall back to ~/.fog."""
    return Path(path or DEFAULT_FOG_PATH).expanduser().resolve()


def _normalize_key(key: Any) -> str:
    return str(key).lstrip(":")


def load_fog_config(path: Path) -> dict[str, dict[str, Any]]:
    """Load the fog credential file.

    Args:
        path: Path to the fog file.

    Returns:
        Ordered mapping of profile name to credential fields. Profiles
        whose value is not a mapping are dropped. When ``:name`` and
        ``name`` both appear, the first one wins.

    Raises:
        ConfigError: If the file is missing, unreadable or not a YAML mapping.
    """
    if not path.is_file():
        raise ConfigError(
            f"Please create a {path} fog configuration file",
            hint="Add a profile with your infrastructure credentials, or point to one with --fog.",
        )

    logger.debug("Loading fog config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a YAML mapping of profiles in {path}, got {type(data).__name__}",
        )

    profiles: dict[str, dict[str, Any]] = {}
    for name, fields in data.items():
        if not isinstance(fields, dict):
            logger.debug("Ignoring fog profile %r: not a mapping", name)
            continue
        key = _normalize_key(name)
        if key in profiles:
            logger.warning(
                "Ignoring duplicate fog profile %r in %s: %r is already defined", name, path, key,
            )
            continue
        profiles[key] = {_normalize_key(k): v for k, v in fields.items()}

    logger.info("Loaded %d fog profile(s) from %s", len(profiles), path)
    return profiles
