"""Leaf matchers implementing the CredentialsMatcher protocol.

Each matcher is a frozen dataclass, immutable after construction, and also
implements Describable. Evaluation never raises because of the shape of
the candidate: a credential that can't answer the question doesn't match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from credmatch._cql import describe_value, string_literal
from credmatch._introspect import IntrospectionError, find_property
from credmatch._log import trace
from credmatch._types import MatcherError, UsernameCredentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UsernameMatcher:
    """Match credentials whose username equals ``username`` exactly.

    Credentials without a username never match, nor do credentials whose
    username can't be read.

    >>> from credmatch.testing import UsernamePassword
    >>> UsernameMatcher("alice").matches(UsernamePassword("id", "alice", "pw"))
    True
    >>> UsernameMatcher("alice").describe()
    '(username == "alice")'

    Raises:
        MatcherError: If username is missing or not a string.
    """

    username: str

    def __post_init__(self) -> None:
        if not isinstance(self.username, str):
            msg = f"username must be a string, got {type(self.username).__name__}"
            raise MatcherError(msg)

    def matches(self, item: object, /) -> bool:
        trace(logger, "%r matches(item %r)", self, item)
        if not isinstance(item, UsernameCredentials):
            logger.debug("%r matches(item %r): no username -> False", self, item)
            return False
        try:
            username = item.username
        except Exception as e:
            logger.warning(
                "%r matches(item %r): reading username raised %r -> False", self, item, e
            )
            return False
        result = self.username == username
        logger.debug("%r matches(item %r): %s", self, item, result)
        return result

    def describe(self) -> str:
        description = f"(username == {string_literal(self.username)})"
        logger.debug("%r describe: %s", self, description)
        return description


@dataclass(frozen=True, slots=True)
class PropertyMatcher[T]:
    """Match credentials whose property ``name`` equals ``expected``.

    The property is looked up by introspection (see credmatch._introspect).
    Every way the lookup can fail resolves to False: the type can't be
    introspected, there is no such property, the property is write-only,
    or reading it raises. Comparison is null-safe: None only equals None.

    ``expected`` is rendered by describe() when it is None, a str, a Char,
    a number, a bool or an Enum member; other values make describe()
    return None.

    Matchers hash by ``(name, expected)``. An unhashable ``expected``, such
    as a list, hashes by its type instead, so any PropertyMatcher can sit in
    a set or inside a hashed AllOfMatcher.

    Raises:
        MatcherError: If name is not a non-empty string.
    """

    name: str
    expected: T | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            msg = f"property name must be a non-empty string, got {self.name!r}"
            raise MatcherError(msg)

    def __hash__(self) -> int:
        try:
            return hash((self.name, self.expected))
        except TypeError:
            # Unhashable expected values still hash by name and kind.
            return hash((self.name, type(self.expected)))

    def matches(self, item: object, /) -> bool:
        trace(logger, "%r matches(item %r)", self, item)
        try:
            descriptor = find_property(item, self.name)
        except IntrospectionError as e:
            logger.warning("%r matches(item %r): %s -> False", self, item, e)
            return False

        if descriptor is None:
            logger.debug("%r matches(item %r): no property %r -> False", self, item, self.name)
            return False
        if descriptor.read is None:
            logger.debug(
                "%r matches(item %r): property %r is not readable -> False",
                self, item, self.name,
            )
            return False

        try:
            actual = descriptor.read(item)
        except Exception as e:
            logger.warning(
                "%r matches(item %r): reading %r raised %r -> False",
                self, item, self.name, e,
            )
            return False

        result = _null_safe_equals(self.expected, actual)
        logger.debug(
            "%r matches(item %r): expected %r, actual %r: %s",
            self, item, self.expected, actual, result,
        )
        return result

    def describe(self) -> str | None:
        description = describe_value(self.name, self.expected)
        logger.debug("%r describe: %s", self, description)
        return description


def _null_safe_equals(expected: object, actual: object) -> bool:
    if expected is None or actual is None:
        return expected is actual
    return bool(expected == actual)
