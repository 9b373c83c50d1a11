"""Tests for the configuration system."""

import json

import pytest

from html_editor.shared.config import (
    DEFAULT_RAW_TEXT_ELEMENTS,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    TokenizerConfig,
    TreeConfig,
)
from html_editor.shared.exceptions import HTMLEditorError


class TestTokenizerConfig:
    """Test suite for TokenizerConfig."""

    def test_default_configuration(self):
        """Test default tokenizer configuration values."""
        config = TokenizerConfig()

        assert config.decode_entities is True
        assert config.decode_attribute_entities is True
        assert config.raw_text_elements == frozenset({"script", "style"})
        assert config.raw_text_elements == DEFAULT_RAW_TEXT_ELEMENTS

    def test_raw_text_elements_are_normalized(self):
        """Test that raw-text names are lowercased into a frozenset."""
        config = TokenizerConfig(raw_text_elements=["SCRIPT", "TextArea"])

        assert config.raw_text_elements == frozenset({"script", "textarea"})

    def test_raw_text_elements_may_be_empty(self):
        """Test that raw-text handling can be switched off entirely."""
        assert TokenizerConfig(raw_text_elements=()).raw_text_elements == frozenset()

    def test_string_is_rejected(self):
        """Test that a single string is not mistaken for a collection."""
        with pytest.raises(ValueError, match="must be a collection of tag names"):
            TokenizerConfig(raw_text_elements="script")

    def test_empty_name_is_rejected(self):
        """Test that blank tag names are rejected."""
        with pytest.raises(ValueError, match="cannot contain empty tag names"):
            TokenizerConfig(raw_text_elements={"script", " "})


class TestTreeConfig:
    """Test suite for TreeConfig."""

    def test_default_configuration(self):
        """Test default tree configuration values."""
        config = TreeConfig()

        assert config.strict_mode is False
        assert config.trim_whitespace is False
        assert config.max_depth is None

    @pytest.mark.parametrize("depth", [0, -1])
    def test_invalid_max_depth(self, depth):
        """Test that max_depth must be positive."""
        with pytest.raises(ValueError, match="max_depth must be > 0 or None"):
            TreeConfig(max_depth=depth)


class TestParserConfig:
    """Test suite for ParserConfig."""

    def test_default_configuration(self):
        """Test default parser configuration values."""
        config = ParserConfig()

        assert config.tokenizer == TokenizerConfig()
        assert config.tree == TreeConfig()
        assert config.correlation_id is None
        assert config.enable_diagnostics is True
        assert config.name is None

    def test_config_is_immutable(self):
        """Test that parser configurations cannot be modified."""
        config = ParserConfig()

        with pytest.raises(AttributeError):
            config.name = "changed"

    def test_blank_correlation_id_rejected(self):
        """Test that a blank correlation ID is rejected."""
        with pytest.raises(ConfigValidationError) as excinfo:
            ParserConfig(correlation_id="  ")

        assert excinfo.value.field_name == "correlation_id"
        assert excinfo.value.suggestions

    def test_presets(self):
        """Test the lenient and strict presets."""
        assert ParserConfig.lenient().tree.strict_mode is False
        assert ParserConfig.lenient().name == "lenient"
        assert ParserConfig.strict().tree.strict_mode is True
        assert ParserConfig.strict().name == "strict"

    def test_override_nested_field(self):
        """Test overriding a component field."""
        config = ParserConfig()
        strict = config.override(tree__strict_mode=True, name="custom")

        assert strict.tree.strict_mode is True
        assert strict.name == "custom"
        assert config.tree.strict_mode is False

    def test_override_tokenizer_field(self):
        """Test that overridden tokenizer fields are validated."""
        config = ParserConfig().override(tokenizer__raw_text_elements=["TEXTAREA"])

        assert config.tokenizer.raw_text_elements == frozenset({"textarea"})

    def test_override_unknown_component(self):
        """Test that unknown components are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component: bogus"):
            ParserConfig().override(bogus__value=1)

    def test_override_unknown_field(self):
        """Test that unknown component fields are rejected."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(tree__nope=1)

    def test_override_invalid_value(self):
        """Test that invalid values are reported as validation errors."""
        with pytest.raises(ConfigValidationError, match="max_depth"):
            ParserConfig().override(tree__max_depth=0)

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = ParserConfig(name="x").to_dict()

        assert data["name"] == "x"
        assert data["tree"] == {
            "strict_mode": False,
            "trim_whitespace": False,
            "max_depth": None,
        }
        assert data["tokenizer"]["raw_text_elements"] == ["script", "style"]

    def test_json_round_trip(self):
        """Test that JSON conversion reproduces the configuration."""
        config = ParserConfig(
            tokenizer=TokenizerConfig(decode_entities=False),
            tree=TreeConfig(max_depth=10),
            correlation_id="abc",
        )

        json_str = config.to_json()

        assert json.loads(json_str)["tree"]["max_depth"] == 10
        assert ParserConfig.from_json(json_str) == config

    def test_from_dict_partial(self):
        """Test that missing fields take their defaults."""
        config = ParserConfig.from_dict({"tree": {"strict_mode": True}})

        assert config.tree.strict_mode is True
        assert config.tokenizer == TokenizerConfig()

    def test_from_dict_unknown_fields(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown TokenizerConfig fields: bogus"):
            ParserConfig.from_dict({"tokenizer": {"bogus": 1}})

    def test_from_dict_invalid_value(self):
        """Test that invalid values are reported as validation errors."""
        with pytest.raises(ConfigValidationError, match="max_depth"):
            ParserConfig.from_dict({"tree": {"max_depth": -5}})

    def test_error_hierarchy(self):
        """Test that configuration errors share the package base class."""
        assert issubclass(ConfigValidationError, ConfigError)
        assert issubclass(ConfigError, HTMLEditorError)
