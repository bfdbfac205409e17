"""Tests for config parsing (credmatch._config).

Validates the dict / YAML → config type conversion.
"""

import textwrap

import pytest

from credmatch import (
    AllOfConfig,
    CharValue,
    ConfigParseError,
    CustomConfig,
    EnumValue,
    LiteralValue,
    PropertyConfig,
    TypedConfig,
    UsernameConfig,
    parse_matcher_config,
    parse_matcher_yaml,
)


class TestParseMatcherConfig:
    """Tests for parse_matcher_config()."""

    def test_username(self) -> None:
        config = parse_matcher_config({"type": "username", "username": "alice"})
        assert config == UsernameConfig(username="alice")

    def test_property_literal(self) -> None:
        config = parse_matcher_config({"type": "property", "name": "port", "expected": 22})
        assert config == PropertyConfig(name="port", expected=LiteralValue(22))

    @pytest.mark.parametrize("value", ["text", 1, 1.5, True, None])
    def test_property_scalars(self, value: object) -> None:
        config = parse_matcher_config({"type": "property", "name": "x", "expected": value})
        assert isinstance(config, PropertyConfig)
        assert config.expected == LiteralValue(value)  # type: ignore[arg-type]

    def test_property_char(self) -> None:
        config = parse_matcher_config(
            {"type": "property", "name": "initial", "expected": {"char": "a"}}
        )
        assert config == PropertyConfig(name="initial", expected=CharValue("a"))

    def test_property_enum(self) -> None:
        config = parse_matcher_config(
            {"type": "property", "name": "scope", "expected": {"enum": "pkg.Scope.GLOBAL"}}
        )
        assert config == PropertyConfig(name="scope", expected=EnumValue("pkg.Scope.GLOBAL"))

    def test_all_of(self) -> None:
        config = parse_matcher_config(
            {
                "type": "all_of",
                "matchers": [
                    {"type": "username", "username": "alice"},
                    {"type": "all_of", "matchers": []},
                ],
            }
        )
        assert config == AllOfConfig(
            matchers=(UsernameConfig("alice"), AllOfConfig(matchers=()))
        )

    def test_all_of_defaults_to_empty(self) -> None:
        assert parse_matcher_config({"type": "all_of"}) == AllOfConfig(matchers=())

    def test_custom(self) -> None:
        config = parse_matcher_config(
            {"type": "custom", "type_url": "example.v1.Id", "config": {"id": "x"}}
        )
        assert isinstance(config, CustomConfig)
        assert config.typed_config == TypedConfig(type_url="example.v1.Id", config={"id": "x"})

    def test_custom_config_defaults_to_empty(self) -> None:
        config = parse_matcher_config({"type": "custom", "type_url": "example.v1.Id"})
        assert isinstance(config, CustomConfig)
        assert config.typed_config.config == {}


class TestParseErrors:
    def test_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a dict"):
            parse_matcher_config(["username"])  # type: ignore[arg-type]

    def test_missing_type(self) -> None:
        with pytest.raises(ConfigParseError, match="missing required field 'type'"):
            parse_matcher_config({"username": "alice"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown matcher type"):
            parse_matcher_config({"type": "any_of"})

    def test_username_missing(self) -> None:
        with pytest.raises(ConfigParseError, match="'username'"):
            parse_matcher_config({"type": "username"})

    def test_username_not_string(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a string"):
            parse_matcher_config({"type": "username", "username": 42})

    def test_property_missing_expected(self) -> None:
        with pytest.raises(ConfigParseError, match="'expected'"):
            parse_matcher_config({"type": "property", "name": "port"})

    def test_property_missing_name(self) -> None:
        with pytest.raises(ConfigParseError, match="'name'"):
            parse_matcher_config({"type": "property", "expected": 1})

    def test_expected_list(self) -> None:
        with pytest.raises(ConfigParseError, match="scalar or a dict"):
            parse_matcher_config({"type": "property", "name": "x", "expected": [1, 2]})

    @pytest.mark.parametrize(
        "expected",
        [{}, {"other": 1}, {"char": "a", "enum": "a.B.C"}],
    )
    def test_expected_dict_needs_one_variant(self, expected: dict) -> None:
        with pytest.raises(ConfigParseError, match="exactly one of"):
            parse_matcher_config({"type": "property", "name": "x", "expected": expected})

    @pytest.mark.parametrize("value", ["", "ab", 1])
    def test_char_must_be_single_character(self, value: object) -> None:
        with pytest.raises(ConfigParseError, match="single character"):
            parse_matcher_config({"type": "property", "name": "x", "expected": {"char": value}})

    @pytest.mark.parametrize("value", ["GLOBAL", 3])
    def test_enum_must_be_qualified(self, value: object) -> None:
        with pytest.raises(ConfigParseError, match="qualified name"):
            parse_matcher_config({"type": "property", "name": "x", "expected": {"enum": value}})

    def test_all_of_matchers_not_list(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a list"):
            parse_matcher_config({"type": "all_of", "matchers": {"type": "username"}})

    def test_nested_error_surfaces(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown matcher type"):
            parse_matcher_config({"type": "all_of", "matchers": [{"type": "nope"}]})

    def test_custom_missing_type_url(self) -> None:
        with pytest.raises(ConfigParseError, match="type_url"):
            parse_matcher_config({"type": "custom"})

    def test_custom_type_url_not_string(self) -> None:
        with pytest.raises(ConfigParseError, match="type_url must be a string"):
            parse_matcher_config({"type": "custom", "type_url": 1})

    def test_custom_config_not_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="config must be a dict"):
            parse_matcher_config({"type": "custom", "type_url": "a", "config": [1]})


class TestParseMatcherYaml:
    def test_document(self) -> None:
        config = parse_matcher_yaml(
            textwrap.dedent(
                """
            type: all_of
            matchers:
              - type: username
                username: alice
              - type: property
                name: active
                expected: true
              - type: property
                name: description
                expected: null
              - type: property
                name: initial
                expected: {char: a}
            """
            )
        )
        assert config == AllOfConfig(
            matchers=(
                UsernameConfig("alice"),
                PropertyConfig("active", LiteralValue(True)),
                PropertyConfig("description", LiteralValue(None)),
                PropertyConfig("initial", CharValue("a")),
            )
        )

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ConfigParseError, match="invalid YAML"):
            parse_matcher_yaml("type: [username")

    def test_non_mapping_document(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a dict"):
            parse_matcher_yaml("- username")
