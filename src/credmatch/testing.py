"""Test utilities for credmatch.

Provides small credential types and a custom matcher for use in tests and
examples. These are NOT a credential model: real domains bring their own
types and credmatch only inspects them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from credmatch._cql import string_literal

if TYPE_CHECKING:
    from credmatch._registry import RegistryBuilder


class CredentialScope(Enum):
    GLOBAL = "global"
    SYSTEM = "system"
    USER = "user"


@dataclass(frozen=True, slots=True)
class UsernamePassword:
    """A username/password credential.

    >>> from credmatch import PropertyMatcher
    >>> PropertyMatcher("username", "alice").matches(UsernamePassword("id", "alice", "pw"))
    True
    """

    id: str
    username: str
    password: str = field(repr=False)
    scope: CredentialScope = CredentialScope.GLOBAL
    description: str = ""


@dataclass(frozen=True, slots=True)
class SecretText:
    """A secret-text credential. Has no username."""

    id: str
    secret: str = field(repr=False)
    scope: CredentialScope = CredentialScope.GLOBAL
    description: str = ""


@dataclass(frozen=True, slots=True)
class IdMatcher:
    """Match credentials by their ``id`` attribute.

    Registered under ``credmatch.test.v1.IdMatcher`` as an example of a
    custom leaf matcher.
    """

    id: str

    def matches(self, item: object, /) -> bool:
        return getattr(item, "id", None) == self.id

    def describe(self) -> str:
        return f"(id == {string_literal(self.id)})"


def register(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the test-domain enum and IdMatcher.

    Type URL: credmatch.test.v1.IdMatcher
    Config field: { "id": "credential-id" }
    """
    return builder.enum(CredentialScope).matcher("credmatch.test.v1.IdMatcher", _id_matcher_factory)


def _id_matcher_factory(config: dict[str, Any]) -> IdMatcher:
    credential_id = config.get("id")
    if not isinstance(credential_id, str):
        msg = "IdMatcher requires an 'id' field (string)"
        raise ValueError(msg)
    return IdMatcher(id=credential_id)
