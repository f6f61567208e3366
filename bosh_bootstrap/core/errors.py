"""
Wizard errors — every fatal condition the bootstrapper can hit.

Each error is reported to the operator as a single message naming the
stage that failed, followed by a non-zero exit. Nothing here is used
for ordinary control flow.

    WizardError
    ├── ConfigError                 fog file missing/malformed, empty catalog
    │   └── UnsupportedProviderError
    ├── SettingsError               manifest unreadable, malformed or unwritable
    ├── CommandError                mkpasswd / bosh lookups failed
    ├── StageFailedError            command runner reported failure
    └── NonInteractiveError         a prompt was needed without a terminal
"""

from __future__ import annotations


class WizardError(Exception):
    """Base class for fatal wizard failures."""

    def __init__(self, message: str, hint: str | None = None, stage: str | None = None):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.stage = stage


class ConfigError(WizardError):
    """Raised when the infrastructure credential source is unusable."""


class UnsupportedProviderError(ConfigError):
    """Raised when a provider has no implemented dispatch branch."""

    def __init__(self, provider: str, what: str | None = None):
        if what is None:
            message = f"Infrastructure provider {provider!r} is not supported"
        else:
            message = f"{what} is not supported for infrastructure provider {provider!r}"
        super().__init__(message, hint="Only AWS is currently supported.")
        self.provider = provider


class SettingsError(WizardError):
    """Raised when the settings manifest cannot be read or written."""


class CommandError(WizardError):
    """Raised when an external lookup command fails or returns nothing."""


class StageFailedError(WizardError):
    """Raised when the command runner fails a provisioning stage."""


class NonInteractiveError(WizardError):
    """Raised when operator input is required but no terminal is attached."""
