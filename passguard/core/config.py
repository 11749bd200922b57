"""Application configuration management.

Configuration is held in plain dataclasses and loaded from ``PASSGUARD_*``
environment variables, optionally seeded from a ``.env`` file. The defaults
reproduce the fixed policies exactly:

- Strong: at least 8 characters and a run of 4 letters
- Default: at most 15 characters
- Generator: lengths 1 to 15, at most 10,000 attempts

Architecture:
- EnvironmentLoader: Environment variable loading with type conversion
- PasswordPolicyConfig: Thresholds used to build the named policies
- GeneratorConfig: Length range and budget of the password generator
- Settings: Main configuration object
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from passguard.core.enums import Environment, LogFormat, LogLevel
from passguard.core.errors import ConfigurationError

ENV_PREFIX = "PASSGUARD_"


# =====================================================================================
# ENVIRONMENT LOADER
# =====================================================================================


class EnvironmentLoader:
    """
    Environment variable loader with type conversion and validation.

    Values already present in the process environment take precedence over
    values read from the environment file.
    """

    def __init__(self, env_file: str | None = ".env", prefix: str = ENV_PREFIX):
        """
        Initialize environment loader.

        Args:
            env_file: Optional environment file to load
            prefix: Prefix prepended to every key looked up
        """
        self.env_file = env_file
        self.prefix = prefix
        self._file_values: dict[str, str] = {}
        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load variables from the environment file if it exists."""
        if not self.env_file or not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()

                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()

                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    self._file_values[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def _raw(self, key: str) -> str | None:
        full_key = f"{self.prefix}{key}"
        value = os.environ.get(full_key)
        if value is None:
            value = self._file_values.get(full_key)
        if value is not None and not value.strip():
            return None
        return value

    def get_integer(
        self,
        key: str,
        default: int | None = None,
        min_value: int | None = None,
    ) -> int | None:
        """Get integer value from environment."""
        value = self._raw(key)
        if value is None:
            return default
        try:
            result = int(value.strip())
        except ValueError as e:
            raise ConfigurationError(
                f"{self.prefix}{key} must be an integer, got {value!r}",
                config_key=f"{self.prefix}{key}",
            ) from e
        if min_value is not None and result < min_value:
            raise ConfigurationError(
                f"{self.prefix}{key} must be >= {min_value}",
                config_key=f"{self.prefix}{key}",
            )
        return result

    def get_float(self, key: str, default: float | None = None) -> float | None:
        """Get float value from environment."""
        value = self._raw(key)
        if value is None:
            return default
        try:
            return float(value.strip())
        except ValueError as e:
            raise ConfigurationError(
                f"{self.prefix}{key} must be a number, got {value!r}",
                config_key=f"{self.prefix}{key}",
            ) from e

    def get_enum(self, key: str, parser: Any, default: Any) -> Any:
        """Get enum value from environment using the enum's parser."""
        value = self._raw(key)
        if value is None:
            return default
        try:
            return parser(value)
        except ValueError as e:
            raise ConfigurationError(str(e), config_key=f"{self.prefix}{key}") from e


# =====================================================================================
# POLICY CONFIGURATION CLASSES
# =====================================================================================


@dataclass
class PasswordPolicyConfig:
    """Thresholds for the named password policies."""

    strong_min_length: int = 8
    default_max_length: int = 15
    consecutive_letters: int = 4

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Validate policy thresholds.

        Raises:
            ConfigurationError: If a threshold is not positive
        """
        for name in ("strong_min_length", "default_max_length", "consecutive_letters"):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be at least 1", config_key=name)


@dataclass
class GeneratorConfig:
    """Password generator configuration."""

    min_length: int = 1
    max_length: int = 15
    max_attempts: int = 10_000
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Validate generator bounds.

        Raises:
            ConfigurationError: If the length range or budget is unusable
        """
        if self.min_length < 1 or self.min_length > self.max_length:
            raise ConfigurationError(
                f"Generator length range [{self.min_length}, {self.max_length}] is invalid",
                config_key="min_length",
            )
        # One upper, one lower and one digit need at least three characters.
        if self.max_length < 3:
            raise ConfigurationError(
                "Generator max_length must be at least 3", config_key="max_length"
            )
        if self.max_attempts < 1:
            raise ConfigurationError(
                "Generator max_attempts must be at least 1", config_key="max_attempts"
            )
        if self.timeout_seconds is not None and self.timeout_seconds < 0:
            raise ConfigurationError(
                "Generator timeout_seconds cannot be negative", config_key="timeout_seconds"
            )


# =====================================================================================
# SETTINGS
# =====================================================================================


@dataclass
class Settings:
    """Main passguard configuration."""

    environment: Environment = Environment.PRODUCTION
    log_level: LogLevel = LogLevel.WARNING
    log_format: LogFormat = LogFormat.PLAIN
    password: PasswordPolicyConfig = field(default_factory=PasswordPolicyConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Validate that the generator can produce a default-policy password.

        Raises:
            ConfigurationError: If no generated length can be accepted
        """
        if self.generator.min_length > self.password.default_max_length:
            raise ConfigurationError(
                "Generator min_length exceeds the default policy max length",
                config_key="generator.min_length",
            )
        # One upper, one lower and one digit need at least three characters.
        if min(self.generator.max_length, self.password.default_max_length) < 3:
            raise ConfigurationError(
                "Generated passwords are capped below 3 characters",
                config_key="password.default_max_length",
            )

    @classmethod
    def from_environment(cls, env_file: str | None = ".env") -> "Settings":
        """Build settings from ``PASSGUARD_*`` environment variables."""
        loader = EnvironmentLoader(env_file)

        password = PasswordPolicyConfig(
            strong_min_length=loader.get_integer("STRONG_MIN_LENGTH", 8, min_value=1),
            default_max_length=loader.get_integer("DEFAULT_MAX_LENGTH", 15, min_value=1),
            consecutive_letters=loader.get_integer("CONSECUTIVE_LETTERS", 4, min_value=1),
        )
        generator = GeneratorConfig(
            min_length=loader.get_integer("GENERATOR_MIN_LENGTH", 1, min_value=1),
            max_length=loader.get_integer("GENERATOR_MAX_LENGTH", 15, min_value=1),
            max_attempts=loader.get_integer("GENERATOR_MAX_ATTEMPTS", 10_000, min_value=1),
            timeout_seconds=loader.get_float("GENERATOR_TIMEOUT_SECONDS"),
        )

        return cls(
            environment=loader.get_enum(
                "ENVIRONMENT", Environment.from_string, Environment.PRODUCTION
            ),
            log_level=loader.get_enum("LOG_LEVEL", LogLevel.from_string, LogLevel.WARNING),
            log_format=loader.get_enum(
                "LOG_FORMAT", lambda value: LogFormat(value.strip().lower()), LogFormat.PLAIN
            ),
            password=password,
            generator=generator,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "log_level": self.log_level.level_name,
            "log_format": self.log_format.value,
            "policy": self.password.__dict__.copy(),
            "generator": self.generator.__dict__.copy(),
        }


@lru_cache
def get_settings(env_file: str | None = ".env") -> Settings:
    """Get cached settings instance."""
    return Settings.from_environment(env_file)


def reset_settings() -> None:
    """Clear the cached settings so the next call reloads them."""
    get_settings.cache_clear()


__all__ = [
    "EnvironmentLoader",
    "GeneratorConfig",
    "PasswordPolicyConfig",
    "Settings",
    "get_settings",
    "reset_settings",
]
