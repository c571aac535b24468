"""
Data models for the credential registry.

Codes (keypad PINs) and tags (RFID/NFC UIDs) live in two independent
namespaces; the same string may be registered in both.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class CredentialClass(str, Enum):
    """The namespace a credential belongs to."""

    CODE = "code"
    TAG = "tag"

    @property
    def label(self) -> str:
        """Capitalised name used in log lines ("Code", "Tag")."""
        return self.value.capitalize()


@dataclass(frozen=True)
class CredentialEntry:
    """
    One registered credential.

    Attributes:
        credential_id: The opaque credential string presented at the gate
        principal_name: The person or entity the credential belongs to
    """

    credential_id: str
    principal_name: str

    def __iter__(self) -> Iterator[str]:
        yield self.credential_id
        yield self.principal_name

    def to_dict(self) -> dict:
        return {
            "credential_id": self.credential_id,
            "principal_name": self.principal_name,
        }
