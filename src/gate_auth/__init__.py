"""
gate_auth - authorization credential registry for gate and door controllers.

Keeps the keypad codes and RFID tags allowed to open a gate, with the name of
the person each belongs to, and persists them as flat strings through a
host-provided storage.
"""

from .config import RegistryConfig, default_config
from .credentials import (
    CallbackStorage,
    CapacityExceededError,
    CredentialClass,
    CredentialEntry,
    CredentialNotFoundError,
    CredentialRegistry,
    CredentialRegistryError,
    CredentialStorage,
    InMemoryStorage,
    InvalidCredentialError,
)

__version__ = "1.0.0"

__all__ = [
    "CallbackStorage",
    "CapacityExceededError",
    "CredentialClass",
    "CredentialEntry",
    "CredentialNotFoundError",
    "CredentialRegistry",
    "CredentialRegistryError",
    "CredentialStorage",
    "InMemoryStorage",
    "InvalidCredentialError",
    "RegistryConfig",
    "default_config",
]
