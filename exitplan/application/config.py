"""
Application Configuration - Central configuration management.

This module provides configuration management for the engine, including
environment variables, numeric precision and logging settings.
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from exitplan.domain.constants import DEFAULT_DECIMAL_PLACES, DEFAULT_PROXIMITY_PCT, quantity_epsilon


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class EngineConfig:
    """Strategy engine configuration."""

    decimal_places: int = DEFAULT_DECIMAL_PLACES
    default_proximity_pct: Decimal = DEFAULT_PROXIMITY_PCT

    @property
    def quantity_epsilon(self) -> Decimal:
        """Quantities below this are treated as zero."""
        return quantity_epsilon(self.decimal_places)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create configuration from environment variables."""
        return cls(
            decimal_places=int(os.getenv("ENGINE_DECIMAL_PLACES", str(DEFAULT_DECIMAL_PLACES))),
            default_proximity_pct=Decimal(os.getenv("ENGINE_PROXIMITY_PCT", str(DEFAULT_PROXIMITY_PCT))),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    json: bool = False
    file: str | None = None
    max_bytes: int = 10485760  # 10MB
    backup_count: int = 5

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create configuration from environment variables."""
        file_path = os.getenv("LOG_FILE")
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            json=os.getenv("LOG_JSON", "false").lower() == "true",
            file=file_path if file_path else None,
            max_bytes=int(os.getenv("LOG_MAX_BYTES", "10485760")),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    environment: Environment = Environment.DEVELOPMENT
    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "engine": {
                "decimal_places": self.engine.decimal_places,
                "default_proximity_pct": str(self.engine.default_proximity_pct),
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "json": self.logging.json,
                "file": self.logging.file,
                "max_bytes": self.logging.max_bytes,
                "backup_count": self.logging.backup_count,
            },
        }

    def validate(self) -> bool:
        """
        Validate the configuration.

        Returns:
            True if valid, raises exception otherwise
        """
        if self.engine.decimal_places < 0:
            raise ValueError("Decimal places cannot be negative")
        if self.engine.default_proximity_pct <= 0:
            raise ValueError("Default proximity percentage must be positive")
        if self.logging.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.logging.level}")

        if self.environment == Environment.PRODUCTION and self.logging.level.upper() == "DEBUG":
            raise ValueError("Debug logging should be disabled in production")

        return True


# Global configuration singleton
_config: ApplicationConfig | None = None


def get_config() -> ApplicationConfig:
    """
    Get the application configuration singleton.

    Returns:
        ApplicationConfig: The application configuration
    """
    global _config
    if _config is None:
        from exitplan.application.config_loader import ConfigLoader

        _config = ConfigLoader.from_env()
    return _config


def set_config(config: ApplicationConfig) -> None:
    """
    Set the application configuration.

    Args:
        config: The new configuration
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the configuration singleton."""
    global _config
    _config = None
