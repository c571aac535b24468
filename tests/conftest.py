"""Shared fixtures for credential registry tests."""

from __future__ import annotations

import pytest

from gate_auth.config import RegistryConfig
from gate_auth.credentials import CredentialRegistry, InMemoryStorage


@pytest.fixture
def storage() -> InMemoryStorage:
    """Storage seeded with two codes and no tags."""
    return InMemoryStorage(codes="1234:Alice,5678:Bob")


@pytest.fixture
def registry(storage: InMemoryStorage) -> CredentialRegistry:
    return CredentialRegistry(storage)


@pytest.fixture
def small_config() -> RegistryConfig:
    return RegistryConfig(max_codes=3, max_tags=2)
