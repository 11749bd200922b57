"""
Base Business Rule

Foundation for the password rules and policies.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

RuleCheck = Callable[[str, str], bool]


class ViolationSeverity(Enum):
    """Severity levels for policy violations."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class PolicyViolation:
    """Represents one failed rule. Never holds the password itself."""
    rule_name: str
    description: str
    severity: str | ViolationSeverity = ViolationSeverity.ERROR
    context: dict[str, Any] = field(default_factory=dict)

    violation_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        """Normalize severity to enum."""
        if isinstance(self.severity, str):
            try:
                self.severity = ViolationSeverity(self.severity)
            except ValueError:
                self.severity = ViolationSeverity.ERROR

    def is_blocking(self) -> bool:
        """Check if this violation is blocking."""
        return self.severity in [ViolationSeverity.ERROR, ViolationSeverity.CRITICAL]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "violation_id": self.violation_id,
            "rule_name": self.rule_name,
            "description": self.description,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class PolicyValidationResult:
    """Result of policy validation."""
    policy_name: str
    is_compliant: bool
    violations: list[PolicyViolation]
    validation_timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    validation_duration_ms: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def failed_rules(self) -> list[str]:
        """Names of the failed rules, in rule order."""
        return [v.rule_name for v in self.violations]

    def has_blocking_violations(self) -> bool:
        """Check if there are blocking violations."""
        return any(v.is_blocking() for v in self.violations)

    def get_violation_summary(self) -> dict[str, int]:
        """Get summary of violations by severity."""
        summary = {severity.value: 0 for severity in ViolationSeverity}
        for violation in self.violations:
            summary[violation.severity.value] += 1
        return summary


@dataclass(frozen=True)
class PasswordRule:
    """
    A named predicate over ``(username, password)``.

    ``check`` returns True when the password satisfies the rule.
    """
    name: str
    description: str
    check: RuleCheck = field(compare=False)
    severity: ViolationSeverity = ViolationSeverity.ERROR

    @property
    def is_blocking(self) -> bool:
        return self.severity in (ViolationSeverity.ERROR, ViolationSeverity.CRITICAL)

    def __call__(self, username: str, password: str) -> bool:
        return self.check(username, password)

    def to_violation(self, **context: Any) -> PolicyViolation:
        return PolicyViolation(
            rule_name=self.name,
            description=self.description,
            severity=self.severity,
            context=context,
        )


class BusinessRule(ABC):
    """Base class for business rules."""

    def __init__(self, rule_name: str | None = None):
        self.rule_name = rule_name or self.__class__.__name__
        self.description = self.__doc__ or "Business rule validation"

    @abstractmethod
    def validate(self, *args, **kwargs) -> list[PolicyViolation]:
        """Validate the rule and return any violations."""

    def is_compliant(self, *args, **kwargs) -> bool:
        """Check if the rule is compliant."""
        violations = self.validate(*args, **kwargs)
        return not self.has_blocking_violations(violations)

    def validate_with_result(self, *args, **kwargs) -> PolicyValidationResult:
        """Validate and return comprehensive result."""
        start_time = datetime.now(UTC)
        violations = self.validate(*args, **kwargs)
        end_time = datetime.now(UTC)

        duration_ms = (end_time - start_time).total_seconds() * 1000

        return PolicyValidationResult(
            policy_name=self.rule_name,
            is_compliant=not self.has_blocking_violations(violations),
            violations=violations,
            validation_duration_ms=duration_ms,
            metadata={
                "rule_description": self.description
            }
        )

    def has_blocking_violations(self, violations: list[PolicyViolation]) -> bool:
        """Check if there are any blocking violations (error or critical)."""
        return any(v.is_blocking() for v in violations)
