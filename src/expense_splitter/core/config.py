#!/usr/bin/env python3
"""
Configuration Management for Expense Splitter

Handles environment-based configuration with validation. Supports multiple
environments (development, test, production); the engine itself reads only
the settlement and split defaults.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class SplitConfig:
    """Defaults applied when creating expenses."""

    default_currency: str = "USD"
    default_category: str = "Other"


@dataclass
class SettlementConfig:
    """Debt settlement optimizer configuration."""

    # Raise instead of warning when credits and debts don't balance
    strict_zero_sum: bool = False


@dataclass
class Config:
    """
    Main configuration class for the expense splitter.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Component configurations
    split: SplitConfig
    settlement: SettlementConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("SPLITTER_ENV", "development"))

        split = SplitConfig(
            default_currency=os.getenv("SPLITTER_DEFAULT_CURRENCY", "USD").upper(),
            default_category=os.getenv("SPLITTER_DEFAULT_CATEGORY", "Other"),
        )

        settlement = SettlementConfig(
            strict_zero_sum=_parse_bool(os.getenv("SPLITTER_STRICT_SETTLEMENT", "false")),
        )

        return cls(
            environment=env,
            split=split,
            settlement=settlement,
            debug=_parse_bool(os.getenv("DEBUG", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        currency = self.split.default_currency
        if len(currency) != 3 or not currency.isalpha():
            errors.append(f"Default currency must be a 3-letter code: {currency!r}")

        if not self.split.default_category.strip():
            errors.append("Default category cannot be empty")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("expense_splitter").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
