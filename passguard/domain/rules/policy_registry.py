"""
Policy Registry

Central registry for the named password policies and the module-level
evaluation functions used by the rest of passguard.
"""

from collections.abc import Callable

from passguard.core.config import PasswordPolicyConfig

from .password_policy import PasswordPolicy, build_default_policy, build_strong_policy

PolicyBuilder = Callable[[PasswordPolicyConfig | None], PasswordPolicy]

POLICY_REGISTRY: dict[str, PolicyBuilder] = {
    "strong": build_strong_policy,
    "default": build_default_policy,
}

STRONG_POLICY = build_strong_policy()
DEFAULT_POLICY = build_default_policy()

_DEFAULT_INSTANCES: dict[str, PasswordPolicy] = {
    "strong": STRONG_POLICY,
    "default": DEFAULT_POLICY,
}


def get_policy(policy_name: str, config: PasswordPolicyConfig | None = None) -> PasswordPolicy:
    """
    Get policy instance by name.

    Args:
        policy_name: Name of the policy to retrieve
        config: Optional thresholds overriding the defaults

    Returns:
        PasswordPolicy: Instance of the requested policy

    Raises:
        ValueError: If policy name is not found
    """
    key = str(policy_name).lower()
    builder = POLICY_REGISTRY.get(key)
    if not builder:
        available = ", ".join(POLICY_REGISTRY.keys())
        raise ValueError(
            f"Unknown policy: {policy_name}. Available policies: {available}"
        )

    if config is None and key in _DEFAULT_INSTANCES:
        return _DEFAULT_INSTANCES[key]
    return builder(config)


def evaluate_strong(username: str, password: str) -> bool:
    """
    Check a user-chosen password against the strong policy.

    Always uses the built-in thresholds (8 characters, a run of 4 letters).
    ``PASSGUARD_*`` overrides apply only to policies built with
    ``get_policy("strong", get_settings().password)``, as the CLI does.
    """
    return STRONG_POLICY.is_compliant(username, password)


def evaluate_default(password: str, username: str = "") -> bool:
    """
    Check a password against the default policy. The username has no effect.

    Always uses the built-in 15 character maximum, whatever the settings say.
    """
    return DEFAULT_POLICY.is_compliant(username, password)


__all__ = [
    "DEFAULT_POLICY",
    "POLICY_REGISTRY",
    "STRONG_POLICY",
    "evaluate_default",
    "evaluate_strong",
    "get_policy",
]
