"""Configuration classes for XML tag validation.

This module provides configuration objects for the reading, extraction and
reporting stages, enabling control over decoding and output behavior.
"""

import codecs
import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from kitty_xml_validator.shared.errors import KittyValidatorError

DEFAULT_TAG_PATTERN = r"<[^>]+>"
VALID_DECODE_ERRORS = ("strict", "replace", "ignore", "backslashreplace")
VALID_OUTPUT_FORMATS = ("text", "json")


@dataclass
class ReaderConfig:
    """Configuration for reading documents from disk."""

    encoding: Optional[str] = None
    fallback_encoding: str = "utf-8"
    detect_encoding: bool = True
    sample_size: int = 4096
    errors: str = "replace"

    def __post_init__(self) -> None:
        """Validate reader configuration."""
        if self.sample_size <= 0:
            raise ValueError("sample_size must be > 0")
        if self.errors not in VALID_DECODE_ERRORS:
            raise ValueError(f"errors must be one of {VALID_DECODE_ERRORS}")
        for name in (self.encoding, self.fallback_encoding):
            if name is None:
                continue
            try:
                codecs.lookup(name)
            except LookupError as e:
                raise ValueError(f"Unknown encoding: {name}") from e


@dataclass
class ExtractionConfig:
    """Configuration for pulling raw tag tokens out of lines."""

    tag_pattern: str = DEFAULT_TAG_PATTERN

    def __post_init__(self) -> None:
        """Validate extraction configuration."""
        if not self.tag_pattern:
            raise ValueError("tag_pattern cannot be empty")
        try:
            re.compile(self.tag_pattern)
        except re.error as e:
            raise ValueError(f"tag_pattern is not a valid regular expression: {e}") from e


@dataclass
class ReportConfig:
    """Configuration for presenting validation results."""

    output_format: str = "text"
    fail_on_errors: bool = False

    def __post_init__(self) -> None:
        """Validate report configuration."""
        if self.output_format not in VALID_OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {VALID_OUTPUT_FORMATS}")


class ConfigError(KittyValidatorError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_SECTIONS = {
    "reader": ReaderConfig,
    "extraction": ExtractionConfig,
    "report": ReportConfig,
}


@dataclass
class ValidatorConfig:
    """Complete configuration for a validation run.

    Component configurations validate themselves on construction; any
    ``ValueError`` they raise is surfaced as ``ConfigValidationError``.
    """

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    correlation_id: Optional[str] = None
    enable_metrics: bool = True

    @classmethod
    def default(cls) -> "ValidatorConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def strict(cls) -> "ValidatorConfig":
        """Create configuration that refuses undecodable input."""
        return cls(reader=ReaderConfig(errors="strict"))

    @classmethod
    def lenient(cls) -> "ValidatorConfig":
        """Create configuration that decodes anything, falling back to latin-1."""
        return cls(reader=ReaderConfig(fallback_encoding="latin-1", errors="replace"))

    def override(self, **kwargs: Any) -> "ValidatorConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; ``section__field`` targets a component

        Returns:
            New ValidatorConfig instance with overrides applied

        Example:
            >>> config = ValidatorConfig().override(reader__errors="strict")
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                if section not in _SECTIONS:
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}",
                        field_name=key,
                        suggestions=sorted(_SECTIONS),
                    )
                nested_overrides.setdefault(section, {})[field_name] = value
            else:
                top_level[key] = value

        try:
            for section, values in nested_overrides.items():
                top_level[section] = replace(getattr(self, section), **values)
            return replace(self, **top_level)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for section in _SECTIONS:
            result[section] = dict(vars(getattr(self, section)))
        result["correlation_id"] = self.correlation_id
        result["enable_metrics"] = self.enable_metrics
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidatorConfig":
        """Create configuration from dictionary.

        Args:
            data: Dictionary containing configuration data; unknown keys are
                rejected so typos do not pass silently

        Returns:
            ValidatorConfig instance created from dictionary
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        known = set(_SECTIONS) | {"correlation_id", "enable_metrics"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )

        values: Dict[str, Any] = {}
        try:
            for section, section_class in _SECTIONS.items():
                if section in data:
                    values[section] = section_class(**data[section])
            if "correlation_id" in data:
                values["correlation_id"] = data["correlation_id"]
            if "enable_metrics" in data:
                values["enable_metrics"] = bool(data["enable_metrics"])
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ValidatorConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Configuration is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ValidatorConfig":
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(config_path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(content)
