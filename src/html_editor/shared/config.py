"""Configuration classes for HTML parsing.

Component configurations validate themselves in ``__post_init__`` and raise
``ValueError``; :class:`ParserConfig` bundles them into one immutable object
and reports any failure as :class:`ConfigValidationError`.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Optional

from .exceptions import HTMLEditorError

DEFAULT_RAW_TEXT_ELEMENTS: FrozenSet[str] = frozenset({"script", "style"})

_COMPONENTS = ("tokenizer", "tree")


class ConfigError(HTMLEditorError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class TokenizerConfig:
    """Configuration for the markup tokenizer."""

    decode_entities: bool = True
    decode_attribute_entities: bool = True
    raw_text_elements: FrozenSet[str] = DEFAULT_RAW_TEXT_ELEMENTS

    def __post_init__(self) -> None:
        """Validate tokenizer configuration."""
        if isinstance(self.raw_text_elements, str):
            raise ValueError("raw_text_elements must be a collection of tag names")
        names = frozenset(name.lower() for name in self.raw_text_elements)
        if any(not name or name.isspace() for name in names):
            raise ValueError("raw_text_elements cannot contain empty tag names")
        self.raw_text_elements = names


@dataclass
class TreeConfig:
    """Configuration for tree building."""

    strict_mode: bool = False
    trim_whitespace: bool = False
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.max_depth is not None and self.max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")


@dataclass(frozen=True)
class ParserConfig:
    """Immutable configuration for the whole parse pipeline.

    Thread-safe due to frozen dataclass implementation; use :meth:`override`
    to derive a modified copy.
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)

    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.tokenizer.__post_init__()
            self.tree.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.correlation_id is not None and not self.correlation_id.strip():
            raise ConfigValidationError(
                "correlation_id cannot be blank",
                field_name="correlation_id",
                suggestions=["Pass None to disable correlation tracking"],
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override,
                using ``component__field`` for nested fields

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig()
            >>> strict = config.override(tree__strict_mode=True)
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {', '.join(_COMPONENTS)}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component, values in nested_overrides.items():
                new_fields[component] = replace(getattr(self, component), **values)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e
        new_fields.update(top_level)

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, (set, frozenset)):
                return sorted(obj)
            if isinstance(obj, (list, tuple)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than silently dropped.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            known = target_class.__dataclass_fields__
            unknown = set(data_dict) - set(known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {target_class.__name__} fields: {', '.join(sorted(unknown))}",
                    field_name=sorted(unknown)[0],
                )

            field_values: Dict[str, Any] = {}
            for field_name, field_info in known.items():
                if field_name not in data_dict:
                    continue
                value = data_dict[field_name]
                field_type = field_info.type
                if hasattr(field_type, "__dataclass_fields__") and isinstance(value, dict):
                    field_values[field_name] = _dict_to_dataclass(value, field_type)
                elif field_name == "raw_text_elements":
                    field_values[field_name] = frozenset(value)
                else:
                    field_values[field_name] = value
            return target_class(**field_values)

        try:
            return _dict_to_dataclass(data, cls)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Recover from unmatched and unclosed tags (the default behaviour)."""
        return cls(name="lenient")

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Reject markup whose tags do not balance."""
        return cls(tree=TreeConfig(strict_mode=True), name="strict")
