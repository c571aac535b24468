"""Registry configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .credentials.models import CredentialClass

DEFAULT_MAX_CODES = 50
DEFAULT_MAX_TAGS = 50
UNKNOWN_PRINCIPAL = "Unknown"

_ENV_FIELDS = {
    "GATE_AUTH_MAX_CODES": "max_codes",
    "GATE_AUTH_MAX_TAGS": "max_tags",
    "GATE_AUTH_UNKNOWN_PRINCIPAL": "unknown_principal",
}


class RegistryConfig(BaseModel):
    """Capacity limits and lookup defaults for a CredentialRegistry."""

    max_codes: int = Field(default=DEFAULT_MAX_CODES, ge=1)
    max_tags: int = Field(default=DEFAULT_MAX_TAGS, ge=1)
    unknown_principal: str = UNKNOWN_PRINCIPAL

    model_config = {"frozen": True}

    def capacity(self, credential_class: CredentialClass) -> int:
        return getattr(self, f"max_{credential_class.value}s")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RegistryConfig:
        """
        Build a config from ``GATE_AUTH_*`` environment variables.

        Unset variables keep their defaults. Values are validated by pydantic,
        so a non-numeric or zero capacity raises ``ValidationError``.
        """
        environ = os.environ if environ is None else environ
        overrides = {
            field: environ[var] for var, field in _ENV_FIELDS.items() if var in environ
        }
        return cls.model_validate(overrides)


default_config = RegistryConfig()
