"""Tests for the configuration system."""

import json

import pytest

from kitty_xml_validator.shared.config import (
    ConfigError,
    ConfigValidationError,
    ExtractionConfig,
    ReaderConfig,
    ReportConfig,
    ValidatorConfig,
)
from kitty_xml_validator.shared.errors import KittyValidatorError


class TestReaderConfig:
    """Test suite for ReaderConfig."""

    def test_defaults(self):
        """Test default reader configuration values."""
        config = ReaderConfig()
        assert config.encoding is None
        assert config.fallback_encoding == "utf-8"
        assert config.detect_encoding is True
        assert config.sample_size == 4096
        assert config.errors == "replace"

    def test_invalid_sample_size(self):
        """Sample size must be positive."""
        with pytest.raises(ValueError, match="sample_size must be > 0"):
            ReaderConfig(sample_size=0)

    def test_invalid_errors_mode(self):
        """Only known decode error handlers are accepted."""
        with pytest.raises(ValueError, match="errors must be one of"):
            ReaderConfig(errors="explode")

    def test_unknown_encoding(self):
        """Encodings must be known to Python."""
        with pytest.raises(ValueError, match="Unknown encoding"):
            ReaderConfig(encoding="klingon")


class TestExtractionConfig:
    """Test suite for ExtractionConfig."""

    def test_default_pattern(self):
        """The default pattern matches any bracketed token."""
        assert ExtractionConfig().tag_pattern == "<[^>]+>"

    def test_invalid_pattern(self):
        """Patterns must compile."""
        with pytest.raises(ValueError, match="not a valid regular expression"):
            ExtractionConfig(tag_pattern="<[")

    def test_empty_pattern(self):
        """Patterns cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            ExtractionConfig(tag_pattern="")


class TestReportConfig:
    """Test suite for ReportConfig."""

    def test_invalid_format(self):
        """Only text and json output are supported."""
        with pytest.raises(ValueError, match="output_format must be one of"):
            ReportConfig(output_format="xml")


class TestValidatorConfig:
    """Test suite for ValidatorConfig."""

    def test_presets(self):
        """Presets differ in how they decode input."""
        assert ValidatorConfig.default().reader.errors == "replace"
        assert ValidatorConfig.strict().reader.errors == "strict"
        assert ValidatorConfig.lenient().reader.fallback_encoding == "latin-1"

    def test_override_nested_field(self):
        """Section-prefixed overrides create a new configuration."""
        config = ValidatorConfig()
        new_config = config.override(reader__encoding="latin-1", enable_metrics=False)

        assert new_config.reader.encoding == "latin-1"
        assert new_config.enable_metrics is False
        assert config.reader.encoding is None

    def test_override_unknown_section(self):
        """Unknown sections are rejected with suggestions."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ValidatorConfig().override(tree__depth=3)
        assert "reader" in exc_info.value.suggestions

    def test_override_invalid_value(self):
        """Invalid override values surface as ConfigValidationError."""
        with pytest.raises(ConfigValidationError):
            ValidatorConfig().override(report__output_format="yaml")

    def test_dict_round_trip(self):
        """to_dict and from_dict are inverse."""
        config = ValidatorConfig(
            reader=ReaderConfig(encoding="utf-16", errors="strict"),
            report=ReportConfig(output_format="json"),
            correlation_id="run-1",
        )
        restored = ValidatorConfig.from_dict(config.to_dict())
        assert restored == config

    def test_json_round_trip(self):
        """to_json and from_json are inverse."""
        config = ValidatorConfig.lenient()
        assert ValidatorConfig.from_json(config.to_json()) == config

    def test_partial_dict(self):
        """Missing sections keep their defaults."""
        config = ValidatorConfig.from_dict({"report": {"fail_on_errors": True}})
        assert config.report.fail_on_errors is True
        assert config.reader == ReaderConfig()

    def test_unknown_keys_rejected(self):
        """Typos in top-level keys are reported."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration keys"):
            ValidatorConfig.from_dict({"raeder": {}})

    def test_invalid_section_value(self):
        """Invalid values inside a section are reported."""
        with pytest.raises(ConfigValidationError):
            ValidatorConfig.from_dict({"reader": {"sample_size": -1}})

    def test_invalid_json(self):
        """Malformed JSON raises ConfigError."""
        with pytest.raises(ConfigError, match="not valid JSON"):
            ValidatorConfig.from_json("{not json")

    def test_from_file(self, tmp_path):
        """Configuration loads from a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"reader": {"encoding": "latin-1"}}))

        assert ValidatorConfig.from_file(path).reader.encoding == "latin-1"

    def test_from_missing_file(self, tmp_path):
        """Unreadable files raise ConfigError."""
        with pytest.raises(ConfigError, match="Could not read config file"):
            ValidatorConfig.from_file(tmp_path / "missing.json")

    def test_error_hierarchy(self):
        """Configuration errors share the package base exception."""
        assert issubclass(ConfigValidationError, ConfigError)
        assert issubclass(ConfigError, KittyValidatorError)
