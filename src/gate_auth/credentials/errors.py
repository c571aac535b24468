"""Exceptions raised by the credential registry."""

from __future__ import annotations

from .models import CredentialClass


class CredentialRegistryError(Exception):
    """Base class for all registry errors."""


class CapacityExceededError(CredentialRegistryError):
    """
    A new credential was added to a class that is already full.

    Attributes:
        credential_class: The class that is full
        limit: Its configured capacity
    """

    def __init__(self, credential_class: CredentialClass, limit: int):
        super().__init__(
            f"Maximum number of {credential_class.value}s reached ({limit})"
        )
        self.credential_class = credential_class
        self.limit = limit


class CredentialNotFoundError(CredentialRegistryError, KeyError):
    """A credential targeted for removal is not registered."""

    def __init__(self, credential_class: CredentialClass, credential_id: str):
        super().__init__(f"{credential_class.label} not found: {credential_id}")
        self.credential_class = credential_class
        self.credential_id = credential_id

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class InvalidCredentialError(CredentialRegistryError, ValueError):
    """A credential id or principal name cannot be stored in the flat format."""

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(f"Invalid {field} {value!r}: {reason}")
        self.field = field
        self.value = value
        self.reason = reason
