"""Tests for parser configuration."""

import json
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from lenient_xml.shared.config import ParserConfig
from lenient_xml.shared.errors import ConfigError, ConfigValidationError


class TestParserConfig:
    """Test suite for ParserConfig."""

    def test_default_configuration(self) -> None:
        """Test default configuration values."""
        config = ParserConfig()

        assert config.strict_close_tags is False
        assert config.max_input_size is None
        assert config.logging_level == "WARNING"

    def test_presets(self) -> None:
        """Test lenient and strict presets."""
        assert ParserConfig.lenient() == ParserConfig()
        assert ParserConfig.strict().strict_close_tags is True

    def test_config_is_immutable(self) -> None:
        """Test configuration objects cannot be mutated."""
        config = ParserConfig()

        with pytest.raises(FrozenInstanceError):
            config.strict_close_tags = True  # type: ignore

    @pytest.mark.parametrize("kwargs, field_name", [
        ({"max_input_size": 0}, "max_input_size"),
        ({"max_input_size": -10}, "max_input_size"),
        ({"logging_level": "LOUD"}, "logging_level"),
        ({"strict_close_tags": "yes"}, "strict_close_tags"),
    ])
    def test_validation_failures(self, kwargs: dict, field_name: str) -> None:
        """Test invalid values raise ConfigValidationError naming the field."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(**kwargs)

        assert exc_info.value.field_name == field_name

    def test_override_creates_new_instance(self) -> None:
        """Test override returns a modified copy."""
        config = ParserConfig()
        strict = config.override(strict_close_tags=True, max_input_size=100)

        assert strict is not config
        assert strict.strict_close_tags is True
        assert strict.max_input_size == 100
        assert config.strict_close_tags is False

    def test_override_rejects_unknown_fields(self) -> None:
        """Test unknown override keys are reported with suggestions."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration fields: strict") as exc_info:
            ParserConfig().override(strict=True)

        assert "strict_close_tags" in exc_info.value.suggestions

    def test_override_revalidates(self) -> None:
        """Test overrides go through validation."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(max_input_size=0)


class TestConfigSerialization:
    """Test dictionary, JSON and file round trips."""

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        assert ParserConfig.strict().to_dict() == {
            "strict_close_tags": True,
            "max_input_size": None,
            "logging_level": "WARNING",
        }

    def test_json_round_trip(self) -> None:
        """Test a configuration survives JSON serialization."""
        config = ParserConfig(strict_close_tags=True, max_input_size=2048, logging_level="DEBUG")

        assert ParserConfig.from_json(config.to_json()) == config

    def test_from_dict_partial(self) -> None:
        """Test missing keys keep their defaults."""
        config = ParserConfig.from_dict({"max_input_size": 10})

        assert config.max_input_size == 10
        assert config.strict_close_tags is False

    def test_from_dict_rejects_non_mapping(self) -> None:
        """Test non-object JSON is rejected."""
        with pytest.raises(ConfigError, match="must be a JSON object"):
            ParserConfig.from_json("[1, 2]")

    def test_from_json_invalid(self) -> None:
        """Test malformed JSON raises ConfigError."""
        with pytest.raises(ConfigError, match="Invalid JSON configuration"):
            ParserConfig.from_json("{not json")

    def test_from_file(self, tmp_path: Path) -> None:
        """Test loading configuration from a file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"strict_close_tags": True}), encoding="utf-8")

        assert ParserConfig.from_file(config_path).strict_close_tags is True

    def test_from_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Could not read config file"):
            ParserConfig.from_file(tmp_path / "missing.json")
