"""
Gate credentials: authorized keypad codes and RFID tags.

Usage:
    from gate_auth.credentials import CredentialClass, CredentialRegistry

    registry = CredentialRegistry.in_memory(codes="1234:Alice,5678:Bob")

    registry.is_authorized(CredentialClass.CODE, "1234")     # True
    registry.principal_name(CredentialClass.CODE, "9999")    # "Unknown"
    registry.add_credential(CredentialClass.TAG, "04A1B2C3", "Carol")
"""

from .codec import CredentialCodec, FlatCodec, decode, encode
from .errors import (
    CapacityExceededError,
    CredentialNotFoundError,
    CredentialRegistryError,
    InvalidCredentialError,
)
from .models import CredentialClass, CredentialEntry
from .registry import CredentialRegistry
from .storage import CallbackStorage, CredentialStorage, InMemoryStorage

__all__ = [
    "CallbackStorage",
    "CapacityExceededError",
    "CredentialClass",
    "CredentialCodec",
    "CredentialEntry",
    "CredentialNotFoundError",
    "CredentialRegistry",
    "CredentialRegistryError",
    "CredentialStorage",
    "FlatCodec",
    "InMemoryStorage",
    "InvalidCredentialError",
    "decode",
    "encode",
]
