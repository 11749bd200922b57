"""passguard: password policy enforcement.

Validates passwords against the ``strong`` and ``default`` policies and
generates random passwords that satisfy the ``default`` policy.
"""

from passguard.domain.rules.policy_registry import (
    evaluate_default,
    evaluate_strong,
    get_policy,
)
from passguard.domain.services.password_generator import (
    PasswordGenerator,
    generate_default_password,
)

__version__ = "1.0.0"

__all__ = [
    "PasswordGenerator",
    "evaluate_default",
    "evaluate_strong",
    "generate_default_password",
    "get_policy",
]
