"""
Password Policy

Named password policies built as ordered lists of rules.

Two policies ship with passguard:

- ``strong``: what a user-chosen password must satisfy. At least 8
  characters, an uppercase letter, a lowercase letter and a digit, letters
  and digits only, a run of 4 letters, and no case-insensitive copy of the
  username.
- ``default``: what a generated password must satisfy. At most 15
  characters, an uppercase letter, a lowercase letter and a digit, letters
  and digits only. The username is accepted and ignored.
"""

from collections.abc import Iterable

from passguard.core.config import PasswordPolicyConfig
from passguard.core.enums import PolicyName
from passguard.core.logging import get_logger

from .base import BusinessRule, PasswordRule, PolicyViolation
from .predicates import (
    contains_username,
    has_consecutive_letters,
    has_digit,
    has_lower,
    has_max_length,
    has_minimum_length,
    has_upper,
    is_alphanumeric_only,
)

logger = get_logger(__name__)


class PasswordPolicy(BusinessRule):
    """Password policy: a named conjunction of password rules."""

    def __init__(self, name: str, rules: Iterable[PasswordRule]):
        super().__init__(name)
        self.name = name
        self.rules: tuple[PasswordRule, ...] = tuple(rules)
        if not self.rules:
            raise ValueError(f"Policy {name!r} needs at least one rule")

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def is_compliant(self, username: str, password: str) -> bool:
        """Check the password, stopping at the first blocking rule that fails."""
        for rule in self.rules:
            if rule.is_blocking and not rule(username, password):
                logger.debug(
                    "Password rejected",
                    policy=self.name,
                    failed_rule=rule.name,
                )
                return False

        logger.debug("Password accepted", policy=self.name)
        return True

    def validate(self, username: str, password: str) -> list[PolicyViolation]:
        """Evaluate every rule and return a violation for each failure."""
        violations = [
            rule.to_violation(policy=self.name)
            for rule in self.rules
            if not rule(username, password)
        ]

        if violations:
            logger.debug(
                "Password failed policy",
                policy=self.name,
                failed_rules=[v.rule_name for v in violations],
            )
        return violations

    def __call__(self, username: str, password: str) -> bool:
        return self.is_compliant(username, password)

    def __repr__(self) -> str:
        return f"PasswordPolicy(name={self.name!r}, rules={self.rule_names!r})"


# =====================================================================================
# POLICY BUILDERS
# =====================================================================================


def _character_class_rules() -> list[PasswordRule]:
    return [
        PasswordRule(
            name="has_upper",
            description="Password must contain at least one uppercase letter",
            check=lambda username, password: has_upper(password),
        ),
        PasswordRule(
            name="has_lower",
            description="Password must contain at least one lowercase letter",
            check=lambda username, password: has_lower(password),
        ),
        PasswordRule(
            name="has_digit",
            description="Password must contain at least one digit",
            check=lambda username, password: has_digit(password),
        ),
        PasswordRule(
            name="alphanumeric_only",
            description="Password may only contain letters and digits",
            check=lambda username, password: is_alphanumeric_only(password),
        ),
    ]


def build_strong_policy(config: PasswordPolicyConfig | None = None) -> PasswordPolicy:
    """Build the policy applied to passwords typed by the user."""
    config = config or PasswordPolicyConfig()
    min_length = config.strong_min_length
    run = config.consecutive_letters

    rules = [
        PasswordRule(
            name="min_length",
            description=f"Password must be at least {min_length} characters",
            check=lambda username, password: has_minimum_length(password, min_length),
        ),
        *_character_class_rules(),
        PasswordRule(
            name="consecutive_letters",
            description=f"Password must contain at least {run} consecutive letters",
            check=lambda username, password: has_consecutive_letters(password, run),
        ),
        PasswordRule(
            name="no_username",
            description="Password must not contain your username",
            check=lambda username, password: not contains_username(username, password),
        ),
    ]
    return PasswordPolicy(PolicyName.STRONG.value, rules)


def build_default_policy(config: PasswordPolicyConfig | None = None) -> PasswordPolicy:
    """Build the policy applied to generated passwords."""
    config = config or PasswordPolicyConfig()
    max_length = config.default_max_length

    rules = [
        PasswordRule(
            name="max_length",
            description=f"Password must be no more than {max_length} characters",
            check=lambda username, password: has_max_length(password, max_length),
        ),
        *_character_class_rules(),
    ]
    return PasswordPolicy(PolicyName.DEFAULT.value, rules)
