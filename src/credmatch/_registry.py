"""Type registry for config-driven matcher construction.

The registry turns parsed config into a runtime matcher tree. Built-in
matchers (username, property, all_of) need no registration; custom leaf
matchers and the enum types usable as expected values are registered by
name.

- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (config: dict) → CredentialsMatcher
- load_matcher() walks the config tree and constructs runtime matchers

Example::

    builder = RegistryBuilder()
    builder.enum(CredentialScope)
    builder.matcher("example.v1.IdMatcher", lambda cfg: IdMatcher(cfg["id"]))
    registry = builder.build()

    matcher = registry.load_matcher(parse_matcher_yaml(text))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from credmatch._composite import AllOfMatcher
from credmatch._config import (
    AllOfConfig,
    CharValue,
    CustomConfig,
    EnumValue,
    LiteralValue,
    PropertyConfig,
    UsernameConfig,
)
from credmatch._cql import Char
from credmatch._leaf_matchers import PropertyMatcher, UsernameMatcher
from credmatch._types import CredentialsMatcher, MatcherError

if TYPE_CHECKING:
    from collections.abc import Callable
    from enum import Enum

    from credmatch._config import ExpectedValueConfig, MatcherConfig, TypedConfig

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_MATCHERS_PER_CONJUNCTION = 256

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnknownTypeUrlError(MatcherError):
    """A custom matcher type_url was not found in the registry."""

    def __init__(self, type_url: str, available: list[str]) -> None:
        self.type_url = type_url
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown matcher type_url: {type_url!r} (registered: {registered})"
        else:
            msg = f"unknown matcher type_url: {type_url!r} (no matcher types are registered)"
        super().__init__(msg)


class UnknownEnumError(MatcherError):
    """An enum value referenced an enum type that is not registered."""

    def __init__(self, enum_name: str, available: list[str]) -> None:
        self.enum_name = enum_name
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown enum type: {enum_name!r} (registered: {registered})"
        else:
            msg = f"unknown enum type: {enum_name!r} (no enum types are registered)"
        super().__init__(msg)


class InvalidConfigError(MatcherError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyMatchersError(MatcherError):
    """An all_of config has too many children (width-based limit)."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(
            f"too many matchers in all_of: {count} exceeds maximum {max_}"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type MatcherFactory = Callable[[dict[str, Any]], CredentialsMatcher]


def enum_name(enum_cls: type[Enum]) -> str:
    """The qualified name an enum type is registered and rendered under."""
    return f"{enum_cls.__module__}.{enum_cls.__qualname__}"


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register custom matcher factories and enum types, then call build()
    to produce an immutable Registry.
    """

    def __init__(self) -> None:
        self._matcher_factories: dict[str, MatcherFactory] = {}
        self._enums: dict[str, type[Enum]] = {}

    def matcher(self, type_url: str, factory: MatcherFactory) -> RegistryBuilder:
        """Register a custom matcher factory with a type URL."""
        self._matcher_factories[type_url] = factory
        return self

    def enum(self, enum_cls: type[Enum]) -> RegistryBuilder:
        """Register an enum type so its members can be expected values."""
        self._enums[enum_name(enum_cls)] = enum_cls
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(
            _matcher_factories=MappingProxyType(dict(self._matcher_factories)),
            _enums=MappingProxyType(dict(self._enums)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of custom matcher factories and enum types.

    Constructed via RegistryBuilder. Use load_matcher() to compile
    config into a runtime matcher.
    """

    _matcher_factories: MappingProxyType[str, MatcherFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )
    _enums: MappingProxyType[str, type[Enum]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_matcher(self, config: MatcherConfig) -> CredentialsMatcher:
        """Load a matcher tree from configuration.

        Raises:
            UnknownTypeUrlError: custom matcher type_url not registered
            UnknownEnumError: enum expected value of an unregistered type
            InvalidConfigError: config payload malformed
            TooManyMatchersError: too many children in an all_of
            MatcherError: invalid matcher arguments or depth exceeded
        """
        match config:
            case UsernameConfig(username=username):
                return UsernameMatcher(username)
            case PropertyConfig(name=name, expected=expected):
                return PropertyMatcher(name, self._load_expected(expected))
            case AllOfConfig(matchers=children):
                if len(children) > MAX_MATCHERS_PER_CONJUNCTION:
                    raise TooManyMatchersError(len(children), MAX_MATCHERS_PER_CONJUNCTION)
                return AllOfMatcher(tuple(self.load_matcher(c) for c in children))
            case CustomConfig(typed_config=tc):
                return self._load_custom(tc)
            case _:  # pragma: no cover
                msg = f"unknown matcher config type: {type(config).__name__}"
                raise InvalidConfigError(msg)

    @property
    def matcher_count(self) -> int:
        """Number of registered custom matcher types."""
        return len(self._matcher_factories)

    @property
    def enum_count(self) -> int:
        """Number of registered enum types."""
        return len(self._enums)

    def contains_matcher(self, type_url: str) -> bool:
        return type_url in self._matcher_factories

    def contains_enum(self, name: str) -> bool:
        return name in self._enums

    def matcher_type_urls(self) -> list[str]:
        """Return all registered matcher type URLs (sorted)."""
        return sorted(self._matcher_factories.keys())

    def enum_names(self) -> list[str]:
        """Return all registered enum type names (sorted)."""
        return sorted(self._enums.keys())

    # ── Private loading methods ────────────────────────────────────────────

    def _load_custom(self, config: TypedConfig) -> CredentialsMatcher:
        factory = self._matcher_factories.get(config.type_url)
        if factory is None:
            raise UnknownTypeUrlError(config.type_url, list(self._matcher_factories.keys()))
        try:
            matcher = factory(config.config)
        except Exception as e:
            raise InvalidConfigError(str(e)) from e
        if not isinstance(matcher, CredentialsMatcher):
            msg = f"factory for {config.type_url!r} returned {type(matcher).__name__}, not a matcher"
            raise InvalidConfigError(msg)
        return matcher

    def _load_expected(self, config: ExpectedValueConfig) -> Any:
        match config:
            case LiteralValue(value=value):
                return value
            case CharValue(value=value):
                return Char(value)
            case EnumValue(qualified_name=qualified_name):
                return self._load_enum_member(qualified_name)
            case _:  # pragma: no cover
                msg = f"unknown expected value config type: {type(config).__name__}"
                raise InvalidConfigError(msg)

    def _load_enum_member(self, qualified_name: str) -> Enum:
        type_name, _, member = qualified_name.rpartition(".")
        enum_cls = self._enums.get(type_name)
        if enum_cls is None:
            raise UnknownEnumError(type_name, list(self._enums.keys()))
        try:
            return enum_cls[member]
        except KeyError as e:
            msg = f"{type_name} has no member {member!r}"
            raise InvalidConfigError(msg) from e
