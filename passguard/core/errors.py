"""Error classes and error handling for passguard.

A weak password is a normal outcome and is reported as ``False`` by the
policies. The classes here cover the real failure modes: bad configuration,
unusable interactive input and password generation running out of budget.
"""

import time
import uuid
from enum import Enum
from typing import Any

SENSITIVE_KEYS = frozenset({"password", "token", "secret", "credential", "candidate"})


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PassGuardError(Exception):
    """
    Base exception for all passguard errors.

    Carries an error code, structured details, a severity level and an
    optional recovery hint, and logs itself when raised.
    """

    default_code: str = "ERROR"
    exit_code: int = 1
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retryable: bool = False

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = kwargs.get("code") or self.default_code
        self.details = kwargs.get("details") or {}
        self.error_id = str(uuid.uuid4())
        self.timestamp = time.time()
        self.user_message = kwargs.get("user_message") or message
        self.recovery_hint = kwargs.get("recovery_hint")
        self.context = kwargs.get("context") or {}
        self.__cause__ = kwargs.get("cause")

        self._log_error()

    def _log_error(self) -> None:
        """Log error with structured data."""
        # core.logging imports this module
        from passguard.core.logging import get_logger

        logger = get_logger(f"passguard.errors.{self.__class__.__name__}")
        log_data = {
            "error_id": self.error_id,
            "code": self.code,
            "error_message": self.message,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "details": self._sanitize_details(self.details),
            "error_context": self._sanitize_details(self.context),
            "error_class": self.__class__.__name__,
        }

        if self.severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", **log_data)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error("High severity error", **log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error", **log_data)
        else:
            logger.info("Low severity error", **log_data)

    def _sanitize_details(self, details: dict) -> dict:
        """Sanitize error details to remove sensitive information."""
        if not details:
            return {}

        sanitized = {}
        for key, value in details.items():
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_details(value)
            else:
                sanitized[key] = value

        return sanitized

    def to_dict(
        self, include_details: bool = True, include_internal: bool = False
    ) -> dict[str, Any]:
        """
        Serialize error for logging or display.

        Args:
            include_details: Include error details
            include_internal: Include internal debugging info (error_id, severity, etc.)
        """
        data = {
            "error": self.code,
            "message": self.user_message,
            "timestamp": self.timestamp,
        }

        if include_details and self.details:
            data["details"] = self._sanitize_details(self.details)

        if self.recovery_hint:
            data["recovery_hint"] = self.recovery_hint

        if self.retryable:
            data["retryable"] = True

        if include_internal:
            data.update(
                {
                    "error_id": self.error_id,
                    "severity": self.severity.value,
                    "internal_message": self.message,
                    "context": self._sanitize_details(self.context),
                }
            )

        return data

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DomainError(PassGuardError):
    """Base class for domain errors."""

    default_code = "DOMAIN_ERROR"
    severity = ErrorSeverity.MEDIUM


class ApplicationError(PassGuardError):
    """Base class for application layer errors."""

    default_code = "APPLICATION_ERROR"
    severity = ErrorSeverity.MEDIUM


class InfrastructureError(PassGuardError):
    """Base class for infrastructure errors."""

    default_code = "INFRASTRUCTURE_ERROR"
    severity = ErrorSeverity.HIGH


class InputError(ApplicationError):
    """Interactive input could not be read (end of input, closed stream)."""

    default_code = "INPUT_ERROR"
    exit_code = 2
    severity = ErrorSeverity.LOW

    def __init__(self, message: str, prompt: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("recovery_hint", "Run the command again from an interactive terminal")
        details = kwargs.pop("details", None) or {}
        if prompt:
            details["prompt"] = prompt
        super().__init__(message, details=details, **kwargs)


class ConfigurationError(InfrastructureError):
    """Configuration error."""

    default_code = "CONFIGURATION_ERROR"
    exit_code = 2
    severity = ErrorSeverity.CRITICAL

    def __init__(
        self, message: str, config_key: str | None = None, **kwargs: Any
    ) -> None:
        details = kwargs.pop("details", None) or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(
            message,
            user_message=f"Configuration issue: {message}",
            details=details,
            **kwargs,
        )


class GenerationExhaustedError(DomainError):
    """Password generation used up its attempt or time budget."""

    default_code = "GENERATION_EXHAUSTED"
    exit_code = 2
    severity = ErrorSeverity.HIGH
    retryable = True

    def __init__(
        self, attempts: int, reason: str = "attempts", policy: str | None = None, **kwargs: Any
    ) -> None:
        self.attempts = attempts
        self.reason = reason
        details = kwargs.pop("details", None) or {}
        details.update({"attempts": attempts, "reason": reason})
        if policy:
            details["policy"] = policy
        super().__init__(
            f"No compliant password after {attempts} attempts ({reason} limit reached)",
            user_message="Could not generate a compliant password",
            recovery_hint="Raise the attempt limit or timeout and try again",
            details=details,
            **kwargs,
        )


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "DomainError",
    "ErrorSeverity",
    "GenerationExhaustedError",
    "InfrastructureError",
    "InputError",
    "PassGuardError",
]
