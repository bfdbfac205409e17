"""Shared fixtures for credmatch tests."""

from __future__ import annotations

import pytest

from credmatch import Registry, RegistryBuilder
from credmatch.testing import CredentialScope, SecretText, UsernamePassword, register


@pytest.fixture
def alice() -> UsernamePassword:
    return UsernamePassword(
        id="alice-deploy",
        username="alice",
        password="s3cret",
        scope=CredentialScope.GLOBAL,
        description="deploy key",
    )


@pytest.fixture
def bob() -> UsernamePassword:
    return UsernamePassword(id="bob-ci", username="bob", password="hunter2", scope=CredentialScope.USER)


@pytest.fixture
def token() -> SecretText:
    return SecretText(id="api-token", secret="xyzzy", scope=CredentialScope.SYSTEM)


@pytest.fixture
def registry() -> Registry:
    return register(RegistryBuilder()).build()
