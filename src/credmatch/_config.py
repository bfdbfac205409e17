"""Config types for building matcher trees from plain data.

Config-driven matcher construction path:
  dict / YAML → parse_matcher_config() → MatcherConfig → Registry.load_matcher() → matcher

Relationship to runtime types:

| Config type      | Runtime type        |
|------------------|---------------------|
| UsernameConfig   | UsernameMatcher     |
| PropertyConfig   | PropertyMatcher     |
| AllOfConfig      | AllOfMatcher        |
| CustomConfig     | registered factory  |
| LiteralValue     | str/int/float/bool/None expected value |
| CharValue        | Char                |
| EnumValue        | registered Enum member |

Example YAML::

    type: all_of
    matchers:
      - type: username
        username: alice
      - type: property
        name: scope
        expected: {enum: credmatch.testing.CredentialScope.GLOBAL}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """A scalar expected value taken as-is from the config."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class CharValue:
    """A single-character expected value: ``{char: "x"}``."""

    value: str


@dataclass(frozen=True, slots=True)
class EnumValue:
    """An enum member by qualified name: ``{enum: "pkg.mod.Kind.MEMBER"}``.

    The enum type must be registered with RegistryBuilder.enum().
    """

    qualified_name: str


type ExpectedValueConfig = LiteralValue | CharValue | EnumValue


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered matcher factory with its configuration."""

    type_url: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UsernameConfig:
    username: str


@dataclass(frozen=True, slots=True)
class PropertyConfig:
    name: str
    expected: ExpectedValueConfig


@dataclass(frozen=True, slots=True)
class AllOfConfig:
    """All child matchers must match (logical AND)."""

    matchers: tuple[MatcherConfig, ...]


@dataclass(frozen=True, slots=True)
class CustomConfig:
    """Custom leaf matcher resolved via the registry's matcher factories."""

    typed_config: TypedConfig


type MatcherConfig = UsernameConfig | PropertyConfig | AllOfConfig | CustomConfig


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_EXPECTED_VARIANTS = frozenset({"char", "enum"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_matcher_yaml(text: str) -> MatcherConfig:
    """Parse a YAML document into a MatcherConfig.

    Raises:
        ConfigParseError: If the YAML is invalid or the document is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"invalid YAML: {e}"
        raise ConfigParseError(msg) from e
    return parse_matcher_config(data)


def parse_matcher_config(data: dict[str, Any]) -> MatcherConfig:
    """Parse a dict into a MatcherConfig.

    Uses the 'type' discriminant: username, property, all_of, custom.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"matcher must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    matcher_type = data.get("type")
    if matcher_type is None:
        msg = "matcher missing required field 'type'"
        raise ConfigParseError(msg)

    if matcher_type == "username":
        return UsernameConfig(username=_require_str(data, "username", "username matcher"))
    if matcher_type == "property":
        name = _require_str(data, "name", "property matcher")
        if "expected" not in data:
            msg = "property matcher missing required field 'expected'"
            raise ConfigParseError(msg)
        return PropertyConfig(name=name, expected=_parse_expected(data["expected"]))
    if matcher_type == "all_of":
        children = data.get("matchers", [])
        if not isinstance(children, list):
            msg = f"'matchers' must be a list, got {type(children).__name__}"
            raise ConfigParseError(msg)
        return AllOfConfig(matchers=tuple(parse_matcher_config(m) for m in children))
    if matcher_type == "custom":
        return CustomConfig(typed_config=_parse_typed_config(data))

    msg = f"unknown matcher type: {matcher_type!r}"
    raise ConfigParseError(msg)


def _require_str(data: dict[str, Any], key: str, what: str) -> str:
    if key not in data:
        msg = f"{what} missing required field {key!r}"
        raise ConfigParseError(msg)
    value = data[key]
    if not isinstance(value, str):
        msg = f"{what} {key!r} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _parse_expected(data: Any) -> ExpectedValueConfig:
    """Parse an expected value.

    Scalars are literals; ``{char: "x"}`` and ``{enum: "pkg.Kind.X"}`` select
    the character and enum kinds.
    """
    if data is None or isinstance(data, str | int | float | bool):
        return LiteralValue(value=data)

    if not isinstance(data, dict):
        msg = f"expected value must be a scalar or a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    if len(data) != 1 or not _EXPECTED_VARIANTS.issuperset(data):
        expected = sorted(_EXPECTED_VARIANTS)
        msg = f"expected value dict must contain exactly one of {expected}, got keys: {sorted(data)}"
        raise ConfigParseError(msg)

    if "char" in data:
        value = data["char"]
        if not isinstance(value, str) or len(value) != 1:
            msg = f"char value must be a single character, got {value!r}"
            raise ConfigParseError(msg)
        return CharValue(value=value)

    value = data["enum"]
    if not isinstance(value, str) or "." not in value:
        msg = f"enum value must be a qualified name like 'pkg.Kind.MEMBER', got {value!r}"
        raise ConfigParseError(msg)
    return EnumValue(qualified_name=value)


def _parse_typed_config(data: dict[str, Any]) -> TypedConfig:
    if "type_url" not in data:
        msg = "custom matcher missing required field 'type_url'"
        raise ConfigParseError(msg)

    type_url = data["type_url"]
    if not isinstance(type_url, str):
        msg = f"type_url must be a string, got {type(type_url).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(type_url=type_url, config=config)
