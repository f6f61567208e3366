"""
Provider models — the infrastructure choices offered by the catalog.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ProviderKind(str, Enum):
    """Infrastructure vendors the wizard can detect in a fog file."""

    AWS = "AWS"

    @property
    def display_name(self) -> str:
        return self.value


class ProviderOption(BaseModel):
    """One labeled (provider, credentials) entry, e.g. "AWS (default)"."""

    label: str
    kind: ProviderKind
    profile: str
    credentials: dict[str, Any] = Field(default_factory=dict)
