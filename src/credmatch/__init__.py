"""credmatch: credential matchers with CQL self-description.

All public types are exported from this module for flat imports:

    from credmatch import AllOfMatcher, PropertyMatcher, UsernameMatcher
"""

__version__ = "0.1.0"

# Composition
from credmatch._composite import MAX_DEPTH, AllOfMatcher, all_of, matcher_depth

# Config types, see credmatch._config for details
from credmatch._config import (
    AllOfConfig,
    CharValue,
    ConfigParseError,
    CustomConfig,
    EnumValue,
    ExpectedValueConfig,
    LiteralValue,
    MatcherConfig,
    PropertyConfig,
    TypedConfig,
    UsernameConfig,
    parse_matcher_config,
    parse_matcher_yaml,
)

# CQL rendering
from credmatch._cql import Char, describe, describe_value, escape_java

# Introspection
from credmatch._introspect import (
    IntrospectionError,
    PropertyDescriptor,
    find_property,
    property_descriptors,
)

# Leaf matchers
from credmatch._leaf_matchers import PropertyMatcher, UsernameMatcher
from credmatch._log import TRACE

# Registry, see credmatch._registry for details
from credmatch._registry import (
    MAX_MATCHERS_PER_CONJUNCTION,
    InvalidConfigError,
    Registry,
    RegistryBuilder,
    TooManyMatchersError,
    UnknownEnumError,
    UnknownTypeUrlError,
    enum_name,
)

# Protocols
from credmatch._types import (
    CredentialsMatcher,
    Describable,
    MatcherError,
    UsernameCredentials,
)

__all__ = [
    # Protocols
    "CredentialsMatcher",
    "Describable",
    "UsernameCredentials",
    "MatcherError",
    # Leaf matchers
    "UsernameMatcher",
    "PropertyMatcher",
    # Composition
    "AllOfMatcher",
    "all_of",
    "matcher_depth",
    "MAX_DEPTH",
    # CQL rendering
    "Char",
    "describe",
    "describe_value",
    "escape_java",
    # Introspection
    "PropertyDescriptor",
    "IntrospectionError",
    "find_property",
    "property_descriptors",
    # Logging
    "TRACE",
    # Config types
    "LiteralValue",
    "CharValue",
    "EnumValue",
    "ExpectedValueConfig",
    "TypedConfig",
    "UsernameConfig",
    "PropertyConfig",
    "AllOfConfig",
    "CustomConfig",
    "MatcherConfig",
    "ConfigParseError",
    "parse_matcher_config",
    "parse_matcher_yaml",
    # Registry
    "RegistryBuilder",
    "Registry",
    "enum_name",
    "UnknownTypeUrlError",
    "UnknownEnumError",
    "InvalidConfigError",
    "TooManyMatchersError",
    "MAX_MATCHERS_PER_CONJUNCTION",
]
