"""Configuration for lenient XML parsing.

``ParserConfig`` is an immutable dataclass, so a single instance can be shared
between parser objects and threads.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ConfigError, ConfigValidationError

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class ParserConfig:
    """Behavior switches for the scanner and tree builder.

    Attributes:
        strict_close_tags: Raise ``MarkupSyntaxError`` on any close tag that
            does not match the innermost open element, instead of reconciling
            the open-tag stack and emitting warnings
        max_input_size: Reject documents longer than this many characters
        logging_level: Level applied by the command-line tool
    """

    strict_close_tags: bool = False
    max_input_size: Optional[int] = None
    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if not isinstance(self.strict_close_tags, bool):
            raise ConfigValidationError(
                "strict_close_tags must be a boolean",
                field_name="strict_close_tags",
            )
        if self.max_input_size is not None and self.max_input_size <= 0:
            raise ConfigValidationError(
                "max_input_size must be > 0 or None",
                field_name="max_input_size",
            )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS,
            )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Recover from mismatched close tags with warnings (default)."""
        return cls()

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Treat mismatched close tags as fatal."""
        return cls(strict_close_tags=True)

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(strict_close_tags=True)
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration data must be a JSON object")
        return cls().override(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON configuration: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        return cls.from_json(text)
