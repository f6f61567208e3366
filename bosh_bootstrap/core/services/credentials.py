"""
BOSH credentials — the user/password for the micro BOSH being created.
"""

from __future__ import annotations

import getpass
import logging
from collections.abc import Callable

from bosh_bootstrap.adapters.base import Terminal
from bosh_bootstrap.core.errors import SettingsError
from bosh_bootstrap.core.models.settings import (
    PERSISTENT_DISK_MB,
    PLACEHOLDER_IP_ADDRESS,
    BoshSettings,
)
from bosh_bootstrap.core.observability.logging_config import redact
from bosh_bootstrap.core.persistence.settings_file import SettingsStore

logger = logging.getLogger(__name__)


def default_username() -> str:
    """The current OS user, offered as the default BOSH username."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "admin"


def prompt_for_bosh_credentials(terminal: Terminal) -> dict[str, str]:
    """Ask for a username (defaulting to the OS user) and a masked password.

    No strength checks or re-entry: the password only protects a BOSH
    the operator is about to own.
    """
    terminal.say("Please enter a user/password for the BOSH that will be created.")
    username = terminal.ask("BOSH username:", default=default_username())
    password = terminal.ask_secret("BOSH password:")
    redact(password)
    return {"username": username, "password": password}


def record_bosh_credentials(store: SettingsStore, credentials: dict[str, str]) -> None:
    store.set("bosh_username", credentials["username"])
    store.set("bosh_password", credentials["password"])
    store.flush()
    logger.info("Recorded BOSH username %s", credentials["username"])


def build_bosh_settings(
    store: SettingsStore,
    hash_password: Callable[[str], str],
) -> BoshSettings:
    """Salt the stored password and assemble the ``bosh`` settings block.

    The hash is recomputed on every call, so each run gets a new salt.

    Raises:
        SettingsError: If a username is stored without its password.
    """
    password = store.get("bosh_password")
    if password is None:
        raise SettingsError(
            f"Settings have a bosh_username but no bosh_password in {store.path}",
            hint="Remove bosh_username from the settings manifest and run again.",
        )
    redact(password)

    return BoshSettings(
        ip_address=PLACEHOLDER_IP_ADDRESS,
        password=password,
        salted_password=hash_password(password),
        persistent_disk=PERSISTENT_DISK_MB,
    )
