"""
Flat text codec for persisted credential maps.

Format:
    entry := credential_id ":" principal_name
    list  := entry ("," entry)*
    empty := ""

The first colon of an entry separates id from name, so names may contain
colons. Commas are never escaped: ids and names must not contain them, and
ids must not contain colons. Entries without a colon are dropped on decode.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = ","
KEY_SEPARATOR = ":"


def decode(raw: str) -> dict[str, str]:
    """
    Parse a persisted string into an ``id -> name`` mapping.

    Never raises: malformed entries are skipped and later duplicates
    overwrite earlier ones.
    """
    result: dict[str, str] = {}
    if not raw:
        return result

    for entry in raw.split(ENTRY_SEPARATOR):
        key, sep, value = entry.partition(KEY_SEPARATOR)
        if not sep:
            logger.debug("Dropping malformed credential entry: %r", entry)
            continue
        result[key] = value
    return result


def encode(credentials: Mapping[str, str]) -> str:
    """Serialise a mapping in sorted key order so equal maps encode identically."""
    return ENTRY_SEPARATOR.join(
        f"{key}{KEY_SEPARATOR}{credentials[key]}" for key in sorted(credentials)
    )


class CredentialCodec(Protocol):
    """Anything that can turn a credential map into a string and back."""

    def decode(self, raw: str) -> dict[str, str]: ...

    def encode(self, credentials: Mapping[str, str]) -> str: ...

    def check_id(self, credential_id: str) -> str | None: ...

    def check_name(self, principal_name: str) -> str | None: ...


class FlatCodec:
    """The ``id:name,id:name`` codec used by default."""

    def decode(self, raw: str) -> dict[str, str]:
        return decode(raw)

    def encode(self, credentials: Mapping[str, str]) -> str:
        return encode(credentials)

    def check_id(self, credential_id: str) -> str | None:
        """Return why ``credential_id`` cannot round-trip, or None if it can."""
        if not credential_id:
            return "must not be empty"
        if ENTRY_SEPARATOR in credential_id:
            return f"must not contain {ENTRY_SEPARATOR!r}"
        if KEY_SEPARATOR in credential_id:
            return f"must not contain {KEY_SEPARATOR!r}"
        return None

    def check_name(self, principal_name: str) -> str | None:
        """Return why ``principal_name`` cannot round-trip, or None if it can."""
        if not principal_name:
            return "must not be empty"
        if ENTRY_SEPARATOR in principal_name:
            return f"must not contain {ENTRY_SEPARATOR!r}"
        return None
