"""
Persistence collaborators for the credential registry.

The registry never touches a physical medium itself. It reads the last
persisted string for each credential class once and writes both strings
back after every mutation through a ``CredentialStorage``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .models import CredentialClass


class CredentialStorage(Protocol):
    """Durable home for the two encoded credential strings."""

    def load(self, credential_class: CredentialClass) -> str:
        """Return the last string saved for ``credential_class``, or ""."""
        ...

    def save(self, credential_class: CredentialClass, value: str) -> None:
        """Durably record ``value`` for ``credential_class``."""
        ...


class InMemoryStorage:
    """
    Storage holding one string slot per credential class.

    Useful for hosts that persist the strings themselves and for tests;
    ``load_calls`` and ``save_calls`` record every access in order.
    """

    def __init__(self, codes: str = "", tags: str = "") -> None:
        self._values: dict[CredentialClass, str] = {
            CredentialClass.CODE: codes,
            CredentialClass.TAG: tags,
        }
        self.load_calls: list[CredentialClass] = []
        self.save_calls: list[tuple[CredentialClass, str]] = []

    def load(self, credential_class: CredentialClass) -> str:
        self.load_calls.append(credential_class)
        return self._values[credential_class]

    def save(self, credential_class: CredentialClass, value: str) -> None:
        self.save_calls.append((credential_class, value))
        self._values[credential_class] = value

    def get(self, credential_class: CredentialClass) -> str:
        """Peek at a stored value without recording a load."""
        return self._values[credential_class]


class CallbackStorage:
    """Adapts a pair of plain callables to ``CredentialStorage``."""

    def __init__(
        self,
        loader: Callable[[CredentialClass], str | None],
        saver: Callable[[CredentialClass, str], None],
    ) -> None:
        self._loader = loader
        self._saver = saver

    def load(self, credential_class: CredentialClass) -> str:
        # Hosts often return None for a slot that was never written
        return self._loader(credential_class) or ""

    def save(self, credential_class: CredentialClass, value: str) -> None:
        self._saver(credential_class, value)
