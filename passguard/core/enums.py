"""Shared enums for passguard.

This module contains the enumeration classes shared by the configuration,
logging and presentation layers so values are defined in one place.
"""

from enum import Enum


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "dev"
    TESTING = "test"
    PRODUCTION = "prod"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """Create Environment from its value or member name."""
        normalized = value.strip().lower()
        for environment in cls:
            if normalized in (environment.value, environment.name.lower()):
                return environment
        raise ValueError(f"Invalid environment: {value}")


class LogLevel(Enum):
    """Logging levels with priority mapping."""

    DEBUG = ("DEBUG", 10)
    INFO = ("INFO", 20)
    WARNING = ("WARNING", 30)
    ERROR = ("ERROR", 40)
    CRITICAL = ("CRITICAL", 50)

    def __init__(self, level_name: str, priority: int):
        self.level_name = level_name
        self.priority = priority

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """Create LogLevel from string representation."""
        level_str = level_str.strip().upper()
        for level in cls:
            if level.level_name == level_str:
                return level
        raise ValueError(f"Invalid log level: {level_str}")

    def to_logging_level(self) -> int:
        """Convert to standard logging module level."""
        return self.priority


class LogFormat(Enum):
    """Log output formats."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value


class PolicyName(Enum):
    """Names of the built-in password policies."""

    STRONG = "strong"
    DEFAULT = "default"

    def __str__(self) -> str:
        return self.value
