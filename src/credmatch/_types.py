"""Core protocols and the base error type for credmatch.

The type system splits the matcher contract in two:
- CredentialsMatcher is the evaluation port every matcher implements
- Describable is the optional rendering port (CQL self-description)
- UsernameCredentials is the domain capability UsernameMatcher checks for
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class MatcherError(Exception):
    """Errors from matcher construction and validation."""


@runtime_checkable
class CredentialsMatcher(Protocol):
    """Decide whether a credential satisfies a criterion.

    Implementations must be pure: the same item always yields the same
    answer and evaluation never mutates the matcher.
    """

    def matches(self, item: object, /) -> bool: ...


@runtime_checkable
class Describable(Protocol):
    """Render a matcher as a CQL fragment.

    Returning None means the criterion cannot be expressed in CQL. That is
    a normal outcome, not an error.
    """

    def describe(self) -> str | None: ...


@runtime_checkable
class UsernameCredentials(Protocol):
    """A credential that carries a username."""

    @property
    def username(self) -> str: ...
