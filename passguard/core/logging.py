# ruff: noqa: A005
"""Structured logging configuration for passguard.

Logging is built on structlog over the standard library ``logging`` module.
Records pass through security filters before rendering so that candidate
passwords and other secrets never reach a log sink.

Architecture:
- LogConfig: Configuration management with validation
- LogFilter: Filters applied to every record
- SensitiveDataFilter: Masks password and secret fields
- StructuredLogger: Logger wrapper applying filters
- LoggerFactory: structlog configuration and logger caching

Note: This module name intentionally shadows the standard library 'logging'
module inside the ``passguard.core`` package.
"""

import logging
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, TextIO

import structlog
from structlog.contextvars import merge_contextvars

from passguard.core.enums import Environment, LogFormat, LogLevel
from passguard.core.errors import ConfigurationError

# =====================================================================================
# CONFIGURATION
# =====================================================================================


@dataclass
class LogConfig:
    """
    Logging configuration with validation and environment defaults.

    Usage Example:
        config = LogConfig(
            level=LogLevel.DEBUG,
            format=LogFormat.CONSOLE,
            environment=Environment.DEVELOPMENT,
        )
        configure_logging(config)
    """

    level: LogLevel = field(default=LogLevel.WARNING)
    format: LogFormat = field(default=LogFormat.PLAIN)
    environment: Environment = field(default=Environment.PRODUCTION)

    # Output settings
    stream: TextIO | None = field(default=None)

    # Structured logging features
    enable_timestamps: bool = field(default=True)
    enable_caller_info: bool = field(default=False)
    enable_exception_info: bool = field(default=True)

    # Security and filtering
    enable_sensitive_data_filtering: bool = field(default=True)
    truncate_long_messages: bool = field(default=True)
    max_message_length: int = field(default=10000)

    def __post_init__(self):
        """Post-initialization validation and setup."""
        self.validate()
        self.apply_environment_defaults()

    @classmethod
    def from_settings(cls, settings: Any, stream: TextIO | None = None) -> "LogConfig":
        """Build logging configuration from application ``Settings``."""
        return cls(
            level=settings.log_level,
            format=settings.log_format,
            environment=settings.environment,
            stream=stream,
        )

    def validate(self) -> None:
        """
        Validate logging configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.max_message_length < 100:
            raise ConfigurationError(
                "Maximum message length must be at least 100 characters"
            )

    def apply_environment_defaults(self) -> None:
        """Apply environment-specific defaults."""
        if self.environment == Environment.DEVELOPMENT:
            self.enable_caller_info = True

        elif self.environment == Environment.TESTING:
            self.enable_timestamps = False

        elif self.environment == Environment.PRODUCTION:
            self.enable_caller_info = False
            self.enable_sensitive_data_filtering = True


# =====================================================================================
# SECURITY FILTERS
# =====================================================================================


class LogFilter(ABC):
    """Abstract base class for log record filters."""

    @abstractmethod
    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """
        Filter and sanitize log record.

        Args:
            record: Log record to filter

        Returns:
            dict[str, Any]: Filtered log record
        """


class SensitiveDataFilter(LogFilter):
    """
    Filter for masking sensitive values in log records.

    Any field whose name mentions a password, secret, token or credential is
    masked, recursively through nested dicts and lists of dicts.
    """

    def __init__(self, mask_char: str = "*", preserve_length: bool = False):
        """
        Initialize sensitive data filter.

        Args:
            mask_char: Character to use for masking
            preserve_length: Whether to preserve original length when masking
        """
        self.mask_char = mask_char
        self.preserve_length = preserve_length

        self.sensitive_patterns = [
            re.compile(r"passw(or)?d", re.IGNORECASE),
            re.compile(r"secret", re.IGNORECASE),
            re.compile(r"token", re.IGNORECASE),
            re.compile(r"credential", re.IGNORECASE),
            re.compile(r"candidate", re.IGNORECASE),
        ]

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Filter and sanitize log record."""
        filtered_record = {}

        for key, value in record.items():
            if self._is_sensitive_field(key):
                filtered_record[key] = self._mask_value(value)
            elif isinstance(value, dict):
                filtered_record[key] = self.filter(value)
            elif isinstance(value, list):
                filtered_record[key] = [
                    self.filter(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                filtered_record[key] = value

        return filtered_record

    def _is_sensitive_field(self, field_name: str) -> bool:
        """Check if field name indicates sensitive data."""
        return any(pattern.search(field_name) for pattern in self.sensitive_patterns)

    def _mask_value(self, value: Any) -> str | None:
        """Mask sensitive value."""
        if value is None:
            return None

        if self.preserve_length:
            return self.mask_char * len(str(value))
        return f"{self.mask_char * 3}[MASKED]"


class MessageLengthFilter(LogFilter):
    """Filter for truncating overly long log messages."""

    def __init__(
        self, max_length: int = 10000, truncation_suffix: str = "... [TRUNCATED]"
    ):
        self.max_length = max_length
        self.truncation_suffix = truncation_suffix

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Filter and truncate long messages."""
        filtered_record = record.copy()

        message = record.get("message", "")
        if isinstance(message, str) and len(message) > self.max_length:
            truncated_length = self.max_length - len(self.truncation_suffix)
            filtered_record["message"] = (
                message[:truncated_length] + self.truncation_suffix
            )
            filtered_record["message_truncated"] = True

        return filtered_record


# =====================================================================================
# STRUCTURED LOGGER
# =====================================================================================


class StructuredLogger:
    """
    Structured logger applying security filters before emitting.

    Wraps a structlog logger. The configuration can be replaced after
    creation so module-level loggers follow later reconfiguration.
    """

    def __init__(self, name: str, config: LogConfig):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            config: Logging configuration
        """
        self.name = name
        self._logger = structlog.get_logger(name)
        self.apply_config(config)

    def apply_config(self, config: LogConfig) -> None:
        """Replace the configuration and rebuild the filter chain."""
        self.config = config

        self.filters: list[LogFilter] = []
        if config.enable_sensitive_data_filtering:
            self.filters.append(SensitiveDataFilter())
        if config.truncate_long_messages:
            self.filters.append(MessageLengthFilter(config.max_message_length))

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message."""
        self._log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        kwargs["exc_info"] = True
        self.error(message, **kwargs)

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Internal logging method with filtering."""
        if level.priority < self.config.level.priority:
            return

        record = {"message": message, **kwargs}
        for filter_instance in self.filters:
            record = filter_instance.filter(record)

        getattr(self._logger, level.level_name.lower())(
            record.pop("message"), **record
        )


# =====================================================================================
# LOGGER FACTORY
# =====================================================================================


class LoggerFactory:
    """Factory for creating and caching structured loggers."""

    def __init__(self, config: LogConfig):
        self.config = config
        self._loggers: dict[str, StructuredLogger] = {}
        self._configured = False

    def configure_logging(self) -> None:
        """Configure structlog and the standard logging handler."""
        if self._configured:
            return

        processors = [
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
        ]

        if self.config.enable_timestamps:
            processors.append(structlog.processors.TimeStamper(fmt="iso"))

        if self.config.enable_caller_info:
            processors.append(
                structlog.processors.CallsiteParameterAdder(
                    parameters=[
                        structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO,
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                    ]
                )
            )

        if self.config.enable_exception_info:
            processors.extend(
                [
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                ]
            )

        processors.append(structlog.processors.UnicodeDecoder())

        if self.config.format == LogFormat.JSON:
            processors.append(structlog.processors.JSONRenderer())
        elif self.config.format == LogFormat.CONSOLE:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.KeyValueRenderer(key_order=["event"]))

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

        # stdout belongs to the CLI; logs go to stderr.
        root = logging.getLogger("passguard")
        root.handlers.clear()
        handler = logging.StreamHandler(self.config.stream or sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(self.config.level.to_logging_level())
        root.propagate = False

        self._configured = True

    def reconfigure(self, config: LogConfig) -> None:
        """Apply a new configuration to the factory and every logger it created."""
        self.config = config
        self._configured = False
        self.configure_logging()

        for structured_logger in self._loggers.values():
            structured_logger.apply_config(config)

    def get_logger(self, name: str) -> StructuredLogger:
        """Get or create structured logger."""
        if not self._configured:
            self.configure_logging()

        if name not in self._loggers:
            self._loggers[name] = StructuredLogger(name, self.config)

        return self._loggers[name]


# =====================================================================================
# GLOBAL CONFIGURATION AND FACTORY
# =====================================================================================

_logger_factory: LoggerFactory | None = None


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure global logging system.

    Loggers handed out earlier pick up the new configuration.

    Args:
        config: Logging configuration (built from settings if not provided)

    Raises:
        ConfigurationError: If settings are needed and cannot be loaded
    """
    global _logger_factory  # noqa: PLW0603 - Required to initialize global factory

    if config is None:
        from passguard.core.config import get_settings

        config = LogConfig.from_settings(get_settings())

    if _logger_factory is None:
        _logger_factory = LoggerFactory(config)
        _logger_factory.configure_logging()
    else:
        _logger_factory.reconfigure(config)


def get_logger(name: str) -> StructuredLogger:
    """
    Get structured logger instance.

    Before ``configure_logging`` runs, loggers use ``LogConfig()`` defaults;
    settings are not read at import time.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger: Configured logger instance
    """
    if _logger_factory is None:
        configure_logging(LogConfig())

    return _logger_factory.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Add context variables to all subsequent logs in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "LogConfig",
    "LogFilter",
    "LoggerFactory",
    "MessageLengthFilter",
    "SensitiveDataFilter",
    "StructuredLogger",
    "clear_context",
    "configure_logging",
    "get_logger",
    "log_context",
]
