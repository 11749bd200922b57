"""
Password Domain Rules

Character classes, password predicates and the named password policies.
"""

from .base import (
    BusinessRule,
    PasswordRule,
    PolicyValidationResult,
    PolicyViolation,
    ViolationSeverity,
)
from .password_policy import PasswordPolicy, build_default_policy, build_strong_policy
from .policy_registry import (
    DEFAULT_POLICY,
    POLICY_REGISTRY,
    STRONG_POLICY,
    evaluate_default,
    evaluate_strong,
    get_policy,
)

__all__ = [
    'DEFAULT_POLICY',
    'POLICY_REGISTRY',
    'STRONG_POLICY',
    # Base classes
    'BusinessRule',
    'PasswordPolicy',
    'PasswordRule',
    'PolicyValidationResult',
    'PolicyViolation',
    'ViolationSeverity',
    # Builders
    'build_default_policy',
    'build_strong_policy',
    # Evaluation
    'evaluate_default',
    'evaluate_strong',
    'get_policy',
]
