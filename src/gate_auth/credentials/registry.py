"""
Credential Registry.

Holds the authorized codes and tags for a gate controller, each mapping a
credential string to the principal it belongs to. The registry is built
once by the host and handed to whatever reads keypads or tag readers.

Persistence convention:
    Each credential class is stored as one flat string, e.g.
    code -> "1234:Alice,5678:Bob"
    tag  -> "04A1B2C3:Alice"
    Both strings are re-encoded and saved together after every mutation.

Usage:
    storage = InMemoryStorage(codes="1234:Alice,5678:Bob")
    registry = CredentialRegistry(storage)

    if registry.is_authorized(CredentialClass.CODE, "1234"):
        open_gate()

    registry.add_credential(CredentialClass.TAG, "04A1B2C3", "Alice")
    registry.remove_credential(CredentialClass.CODE, "5678")
"""

from __future__ import annotations

import logging
import threading

from ..config import RegistryConfig, default_config
from .codec import CredentialCodec, FlatCodec
from .errors import (
    CapacityExceededError,
    CredentialNotFoundError,
    InvalidCredentialError,
)
from .models import CredentialClass, CredentialEntry
from .storage import CredentialStorage, InMemoryStorage

logger = logging.getLogger(__name__)


class CredentialRegistry:
    """
    In-memory code and tag store backed by a CredentialStorage.

    The stored strings are decoded exactly once, either in the constructor or,
    with ``lazy=True``, on the first operation. After that the maps are the
    source of truth and storage is only written to.
    """

    def __init__(
        self,
        storage: CredentialStorage,
        config: RegistryConfig | None = None,
        codec: CredentialCodec | None = None,
        *,
        lazy: bool = False,
    ) -> None:
        self._storage = storage
        self._config = config or default_config
        self._codec = codec or FlatCodec()
        self._credentials: dict[CredentialClass, dict[str, str]] = {
            credential_class: {} for credential_class in CredentialClass
        }
        self._initialized = False
        self._lock = threading.RLock()

        if not lazy:
            self.initialize()

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """
        Load both credential classes from storage.

        Runs its load at most once; later calls return immediately. Loading
        never writes back to storage.
        """
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return

            for credential_class in CredentialClass:
                raw = self._storage.load(credential_class)
                self._credentials[credential_class] = self._codec.decode(raw)

            self._initialized = True

        for credential_class in CredentialClass:
            limit = self._config.capacity(credential_class)
            if len(self._credentials[credential_class]) > limit:
                logger.warning(
                    "Loaded %d %ss, above the configured maximum (%d); new %ss are refused",
                    len(self._credentials[credential_class]),
                    credential_class.value,
                    limit,
                    credential_class.value,
                )

        logger.info(
            "Authentication system initialized with %d codes and %d tags",
            self.count(CredentialClass.CODE),
            self.count(CredentialClass.TAG),
        )
        for credential_class in CredentialClass:
            for credential_id, name in sorted(self._credentials[credential_class].items()):
                logger.debug("%s: %s -> User: %s", credential_class.label, credential_id, name)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_credential(
        self, credential_class: CredentialClass, credential_id: str, principal_name: str
    ) -> None:
        """
        Register ``credential_id`` for ``principal_name``.

        Re-adding an existing id updates its principal and does not count
        against capacity. A class loaded with more entries than its capacity
        refuses new ids until removals bring it below the limit.

        If storage fails the registry keeps its previous state and the
        storage error propagates.

        Raises:
            InvalidCredentialError: If the id or name cannot be persisted.
            CapacityExceededError: If the class is full and the id is new.
        """
        self._validate(credential_id, principal_name)
        self.initialize()

        with self._lock:
            credentials = self._credentials[credential_class]
            limit = self._config.capacity(credential_class)
            if credential_id not in credentials and len(credentials) >= limit:
                logger.warning(
                    "Maximum number of %ss reached (%d)", credential_class.value, limit
                )
                raise CapacityExceededError(credential_class, limit)

            updated = dict(credentials)
            updated[credential_id] = principal_name
            self._commit(credential_class, updated)

        logger.info(
            "Added authorized %s for: %s", credential_class.value, principal_name
        )

    def remove_credential(self, credential_class: CredentialClass, credential_id: str) -> None:
        """
        Unregister ``credential_id``.

        Raises:
            CredentialNotFoundError: If the id is not registered. Storage is
                left untouched in that case.
        """
        self.initialize()

        with self._lock:
            credentials = self._credentials[credential_class]
            if credential_id not in credentials:
                logger.warning(
                    "%s not found for removal: %s", credential_class.label, credential_id
                )
                raise CredentialNotFoundError(credential_class, credential_id)

            updated = dict(credentials)
            name = updated.pop(credential_id)
            self._commit(credential_class, updated)

        logger.info("Removed authorized %s for: %s", credential_class.value, name)

    def clear(self, credential_class: CredentialClass) -> None:
        """Remove every credential of a class. Always persists, even if already empty."""
        self.initialize()

        with self._lock:
            self._commit(credential_class, {})

        logger.info("All authorized %ss cleared", credential_class.value)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def is_authorized(self, credential_class: CredentialClass, credential_id: str) -> bool:
        """Return whether ``credential_id`` is registered. A miss is logged, not raised."""
        self.initialize()

        name = self._credentials[credential_class].get(credential_id)
        if name is None:
            logger.warning(
                "Unauthorized %s attempt: %s", credential_class.value, credential_id
            )
            return False

        logger.info("%s authorized for: %s", credential_class.label, name)
        return True

    def principal_name(self, credential_class: CredentialClass, credential_id: str) -> str:
        """Return the principal for ``credential_id``, or the configured "Unknown" sentinel."""
        self.initialize()
        return self._credentials[credential_class].get(
            credential_id, self._config.unknown_principal
        )

    def list_credentials(self, credential_class: CredentialClass) -> list[CredentialEntry]:
        """Return all entries of a class sorted by credential id."""
        self.initialize()
        credentials = self._credentials[credential_class]
        return [CredentialEntry(key, credentials[key]) for key in sorted(credentials)]

    def dump(self, credential_class: CredentialClass) -> list[CredentialEntry]:
        """Log every entry of a class for diagnostics and return them."""
        entries = self.list_credentials(credential_class)

        logger.info("=== Authorized %ss ===", credential_class.label)
        for entry in entries:
            logger.info(
                "%s: %s -> User: %s",
                credential_class.label,
                entry.credential_id,
                entry.principal_name,
            )
        logger.info("Total %ss: %d", credential_class.value, len(entries))
        return entries

    def count(self, credential_class: CredentialClass) -> int:
        self.initialize()
        return len(self._credentials[credential_class])

    def capacity(self, credential_class: CredentialClass) -> int:
        return self._config.capacity(credential_class)

    def encoded(self, credential_class: CredentialClass) -> str:
        """Return the flat string the class would be persisted as right now."""
        self.initialize()
        return self._codec.encode(self._credentials[credential_class])

    # ------------------------------------------------------------------
    # Per-class shortcuts
    # ------------------------------------------------------------------

    def add_code(self, code: str, name: str) -> None:
        self.add_credential(CredentialClass.CODE, code, name)

    def add_tag(self, tag: str, name: str) -> None:
        self.add_credential(CredentialClass.TAG, tag, name)

    def remove_code(self, code: str) -> None:
        self.remove_credential(CredentialClass.CODE, code)

    def remove_tag(self, tag: str) -> None:
        self.remove_credential(CredentialClass.TAG, tag)

    def clear_codes(self) -> None:
        self.clear(CredentialClass.CODE)

    def clear_tags(self) -> None:
        self.clear(CredentialClass.TAG)

    def check_code(self, code: str) -> bool:
        return self.is_authorized(CredentialClass.CODE, code)

    def check_tag(self, tag: str) -> bool:
        return self.is_authorized(CredentialClass.TAG, tag)

    def code_user_name(self, code: str) -> str:
        return self.principal_name(CredentialClass.CODE, code)

    def tag_user_name(self, tag: str) -> str:
        return self.principal_name(CredentialClass.TAG, tag)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def in_memory(
        cls, codes: str = "", tags: str = "", config: RegistryConfig | None = None
    ) -> CredentialRegistry:
        """Create a registry over InMemoryStorage seeded with the given strings."""
        return cls(InMemoryStorage(codes=codes, tags=tags), config=config)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate(self, credential_id: str, principal_name: str) -> None:
        reason = self._codec.check_id(credential_id)
        if reason:
            raise InvalidCredentialError("credential_id", credential_id, reason)
        reason = self._codec.check_name(principal_name)
        if reason:
            raise InvalidCredentialError("principal_name", principal_name, reason)

    def _commit(self, credential_class: CredentialClass, updated: dict[str, str]) -> None:
        """
        Save both classes with ``updated`` replacing ``credential_class``, then swap it in.

        The in-memory map only changes once every save has succeeded. On failure,
        classes already written are re-saved with their previous strings so storage
        is not left half-updated. Callers hold the lock.
        """
        encoded = {
            cls: self._codec.encode(updated if cls is credential_class else self._credentials[cls])
            for cls in CredentialClass
        }
        saved: list[CredentialClass] = []
        try:
            for cls, value in encoded.items():
                self._storage.save(cls, value)
                saved.append(cls)
        except Exception:
            logger.error("Failed to persist credentials, keeping previous state")
            self._restore(saved)
            raise

        self._credentials[credential_class] = updated
        logger.info(
            "Saved %d codes and %d tags to persistent storage",
            len(self._credentials[CredentialClass.CODE]),
            len(self._credentials[CredentialClass.TAG]),
        )

    def _restore(self, saved: list[CredentialClass]) -> None:
        for cls in saved:
            try:
                self._storage.save(cls, self._codec.encode(self._credentials[cls]))
            except Exception as exc:
                logger.error("Could not restore persisted %ss: %s", cls.value, exc)
