"""
Core components - error taxonomy and configuration.
"""

from .config import CodecConfig, ConfigValidationError, OutputConfig, ParserConfig
from .errors import (
    AprsError,
    InvalidCallsign,
    InvalidCourse,
    InvalidDataExtension,
    InvalidMessage,
    InvalidPosition,
    InvalidStatus,
    InvalidSymbolTable,
    InvalidTimestamp,
)

__all__ = [
    # Errors
    "AprsError",
    "InvalidMessage",
    "InvalidCallsign",
    "InvalidPosition",
    "InvalidStatus",
    "InvalidTimestamp",
    "InvalidSymbolTable",
    "InvalidCourse",
    "InvalidDataExtension",
    # Configuration
    "CodecConfig",
    "ParserConfig",
    "OutputConfig",
    "ConfigValidationError",
]
