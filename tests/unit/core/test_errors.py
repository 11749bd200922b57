"""
Test cases for the error hierarchy.
"""

import io
import json

import pytest

from passguard.core.enums import Environment, LogFormat, LogLevel
from passguard.core.errors import (
    ApplicationError,
    ConfigurationError,
    DomainError,
    ErrorSeverity,
    GenerationExhaustedError,
    InfrastructureError,
    InputError,
    PassGuardError,
)
from passguard.core.logging import LogConfig, configure_logging


class TestPassGuardError:
    """Base error behavior."""

    def test_defaults(self):
        error = PassGuardError("Something broke")

        assert error.code == "ERROR"
        assert error.user_message == "Something broke"
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.exit_code == 1
        assert str(error) == "ERROR: Something broke"
        assert error.error_id

    def test_details_are_redacted(self):
        error = PassGuardError(
            "Rejected",
            details={
                "password": "hunter2",
                "rule": "min_length",
                "nested": {"api_token": "abc", "attempt": 3},
            },
        )

        data = error.to_dict()

        assert data["details"] == {
            "password": "***REDACTED***",
            "rule": "min_length",
            "nested": {"api_token": "***REDACTED***", "attempt": 3},
        }
        assert error.details["password"] == "hunter2"

    def test_to_dict_internal_fields(self):
        error = PassGuardError(
            "Internal text",
            user_message="Shown text",
            context={"candidate": "Ab1", "step": "draw"},
        )

        data = error.to_dict(include_details=False, include_internal=True)

        assert data["message"] == "Shown text"
        assert data["internal_message"] == "Internal text"
        assert data["severity"] == "medium"
        assert data["context"] == {"candidate": "***REDACTED***", "step": "draw"}
        assert "details" not in data

    def test_cause(self):
        cause = ValueError("bad")
        error = PassGuardError("wrapped", cause=cause)

        assert error.__cause__ is cause

    def test_errors_log_themselves(self):
        """Test self-logging goes through structured logging with its fields."""
        stream = io.StringIO()
        configure_logging(
            LogConfig(
                level=LogLevel.DEBUG,
                format=LogFormat.JSON,
                environment=Environment.TESTING,
                stream=stream,
            )
        )

        ConfigurationError("Broken setting", config_key="x", context={"candidate": "Ab1"})

        [entry] = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert entry["event"] == "Critical error occurred"
        assert entry["level"] == "critical"
        assert entry["logger"] == "passguard.errors.ConfigurationError"
        assert entry["code"] == "CONFIGURATION_ERROR"
        assert entry["details"] == {"config_key": "x"}
        assert "Ab1" not in stream.getvalue()

    def test_low_severity_hidden_at_default_level(self):
        stream = io.StringIO()
        configure_logging(LogConfig(environment=Environment.TESTING, stream=stream))

        InputError("End of input")

        assert stream.getvalue() == ""


class TestErrorHierarchy:
    """Layer base classes and specific errors."""

    @pytest.mark.parametrize(
        "error_class, base",
        [
            (DomainError, PassGuardError),
            (ApplicationError, PassGuardError),
            (InfrastructureError, PassGuardError),
            (InputError, ApplicationError),
            (ConfigurationError, InfrastructureError),
        ],
    )
    def test_subclassing(self, error_class, base):
        assert issubclass(error_class, base)

    def test_generation_exhausted_is_domain_error(self):
        assert issubclass(GenerationExhaustedError, DomainError)

    def test_input_error(self):
        error = InputError("End of input", prompt="Enter username:")

        assert error.code == "INPUT_ERROR"
        assert error.details["prompt"] == "Enter username:"
        assert error.recovery_hint
        assert error.exit_code == 2

    def test_configuration_error(self):
        error = ConfigurationError("max_length must be at least 3", config_key="max_length")

        assert error.code == "CONFIGURATION_ERROR"
        assert error.user_message == "Configuration issue: max_length must be at least 3"
        assert error.details == {"config_key": "max_length"}
        assert error.severity == ErrorSeverity.CRITICAL

    def test_generation_exhausted(self):
        error = GenerationExhaustedError(100, reason="timeout", policy="default")

        assert error.code == "GENERATION_EXHAUSTED"
        assert error.message == "No compliant password after 100 attempts (timeout limit reached)"
        assert error.details == {"attempts": 100, "reason": "timeout", "policy": "default"}
        assert error.retryable is True
        assert error.to_dict()["retryable"] is True
