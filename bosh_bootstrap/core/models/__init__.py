"""
Domain models — Pydantic types for the bootstrapper.

    from bosh_bootstrap.core.models import Settings, ProviderOption, Command, Receipt
"""

from bosh_bootstrap.core.models.command import Command, Receipt
from bosh_bootstrap.core.models.provider import ProviderKind, ProviderOption
from bosh_bootstrap.core.models.settings import (
    PERSISTENT_DISK_MB,
    PLACEHOLDER_IP_ADDRESS,
    BoshSettings,
    FogCredentials,
    Settings,
)

__all__ = [
    "BoshSettings",
    # command.py
    "Command",
    "FogCredentials",
    "PERSISTENT_DISK_MB",
    "PLACEHOLDER_IP_ADDRESS",
    # provider.py
    "ProviderKind",
    "ProviderOption",
    "Receipt",
    # settings.py
    "Settings",
]
