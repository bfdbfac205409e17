"""Matcher composition: logical AND over an ordered list of matchers.

AllOfMatcher evaluates its children in order with short-circuiting and
renders as a parenthesised ``&&`` chain. A conjunction is only describable
when every child is: one non-describable child makes the whole
description None, wherever it sits in the list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from credmatch._cql import describe
from credmatch._log import trace
from credmatch._types import CredentialsMatcher, MatcherError

logger = logging.getLogger(__name__)

MAX_DEPTH = 32


@dataclass(frozen=True, slots=True)
class AllOfMatcher:
    """All matchers must match (logical AND).

    Accepts any iterable of matchers (or None for none) and keeps its own
    tuple copy. Short-circuits on the first False. An empty AllOfMatcher
    matches everything and describes itself as ``true``.

    Equality is order-sensitive: ``AllOfMatcher([a, b]) != AllOfMatcher([b, a])``.

    Depth validation runs at construction time.

    Raises:
        MatcherError: If a child is not a matcher or the tree is deeper
            than MAX_DEPTH.
    """

    matchers: tuple[CredentialsMatcher, ...] = ()
    _depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        matchers = tuple(self.matchers) if self.matchers is not None else ()
        for m in matchers:
            if not isinstance(m, CredentialsMatcher):
                msg = f"expected a matcher, got {type(m).__name__}"
                raise MatcherError(msg)
        object.__setattr__(self, "matchers", matchers)

        depth = 1 + max((matcher_depth(m) for m in matchers), default=0)
        if depth > MAX_DEPTH:
            msg = f"matcher depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
            raise MatcherError(msg)
        object.__setattr__(self, "_depth", depth)

    def matches(self, item: object, /) -> bool:
        trace(logger, "%r matches(item %r)", self, item)
        for matcher in self.matchers:
            trace(logger, "%r matches(item %r) matcher %r", self, item, matcher)
            if not matcher.matches(item):
                logger.debug("%r matches(item %r) matcher %r: False", self, item, matcher)
                return False
        logger.debug("%r matches(item %r): True", self, item)
        return True

    def describe(self) -> str | None:
        if not self.matchers:
            return "true"
        descriptions = []
        for matcher in self.matchers:
            description = describe(matcher)
            if description is None:
                logger.debug("%r describe: %r has no CQL form -> None", self, matcher)
                return None
            descriptions.append(description)
        result = "(" + " && ".join(descriptions) + ")"
        logger.debug("%r describe: %s", self, result)
        return result


def all_of(matchers: Iterable[CredentialsMatcher]) -> CredentialsMatcher:
    """Compose matchers with AND semantics, optimizing for common cases.

    - Empty -> AllOfMatcher() (matches everything)
    - Single -> unwrapped (no wrapping overhead)
    - Multiple -> AllOfMatcher(matchers)
    """
    matchers = tuple(matchers)
    if len(matchers) == 1:
        return matchers[0]
    return AllOfMatcher(matchers)


def matcher_depth(matcher: Any) -> int:
    """Calculate the nesting depth of a matcher tree. Leaves count as 1."""
    match matcher:
        case AllOfMatcher():
            return matcher._depth
        case _:
            return 1
