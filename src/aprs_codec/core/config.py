"""
Configuration management for the APRS codec tools.

Handles parser behaviour, output formatting, and persistence.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigValidationError(ValueError):
    """Raised when configuration values are invalid."""

    pass


@dataclass
class ParserConfig:
    """Configuration for packet parsing in batch tools."""

    skip_invalid: bool = True  # Report and continue on malformed packets
    strip_whitespace: bool = True  # Strip trailing CR/LF and spaces from input lines

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration fields."""
        if not isinstance(self.skip_invalid, bool):
            raise ConfigValidationError(
                f"skip_invalid must be a boolean, got {self.skip_invalid!r}"
            )
        if not isinstance(self.strip_whitespace, bool):
            raise ConfigValidationError(
                f"strip_whitespace must be a boolean, got {self.strip_whitespace!r}"
            )


@dataclass
class OutputConfig:
    """Configuration for JSON output."""

    json_indent: Optional[int] = 2  # None for compact single-line output
    sort_keys: bool = False
    include_raw: bool = False  # Add the raw packet text to each document

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration fields."""
        if self.json_indent is not None and not (0 <= self.json_indent <= 8):
            raise ConfigValidationError(
                f"json_indent must be between 0 and 8 or None, got {self.json_indent}"
            )


@dataclass
class CodecConfig:
    """Main configuration container."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {LOG_LEVELS}, got {self.log_level}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        """Create configuration from dictionary."""
        config = cls(log_level=data.get("log_level", "WARNING"))

        if "parser" in data:
            config.parser = ParserConfig(**data["parser"])

        if "output" in data:
            config.output = OutputConfig(**data["output"])

        return config

    def save(self, path: str) -> bool:
        """Save configuration to JSON file.

        Args:
            path: File path to save configuration to

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            with open(path, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            logger.info(f"Configuration saved to {path}")
            return True
        except (OSError, IOError) as e:
            logger.error(f"Failed to save configuration to {path}: {e}")
            return False
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize configuration: {e}")
            return False

    @classmethod
    def load(cls, path: str) -> Optional["CodecConfig"]:
        """Load configuration from JSON file.

        Args:
            path: File path to load configuration from

        Returns:
            CodecConfig instance or None if loading failed
        """
        try:
            with open(path, "r") as f:
                data = json.load(f)
            config = cls.from_dict(data)
            logger.info(f"Configuration loaded from {path}")
            return config
        except FileNotFoundError:
            logger.warning(f"Configuration file not found: {path}")
            return None
        except (OSError, IOError) as e:
            logger.error(f"Failed to read configuration from {path}: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file {path}: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Invalid configuration format in {path}: {e}")
            return None

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get default configuration file path."""
        return Path.home() / ".config" / "aprs_codec" / "config.json"

    def save_default(self) -> bool:
        """Save to default configuration path."""
        path = self.get_default_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        return self.save(str(path))

    @classmethod
    def load_default(cls) -> "CodecConfig":
        """Load from default configuration path, or create new if not found or invalid."""
        path = cls.get_default_config_path()
        if path.exists():
            config = cls.load(str(path))
            if config is not None:
                return config
            logger.warning("Using default configuration due to load failure")
        return cls()
