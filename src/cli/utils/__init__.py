"""CLI utilities."""

from .config import ConfigError, ConfigManager, CopyIdConfig
from .validation import validate_destination, validate_port

__all__ = [
    "ConfigError",
    "ConfigManager",
    "CopyIdConfig",
    "validate_destination",
    "validate_port",
]
