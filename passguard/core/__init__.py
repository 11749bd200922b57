"""Core infrastructure shared by the passguard layers.

Components:
- config: Environment-driven settings for policies and the generator
- errors: Error hierarchy with severity, codes and self-logging
- logging: structlog-based structured logging with secret masking
- enums: Shared enumerations
"""

from .config import GeneratorConfig, PasswordPolicyConfig, Settings, get_settings
from .errors import (
    ConfigurationError,
    GenerationExhaustedError,
    InputError,
    PassGuardError,
)

__all__ = [
    "ConfigurationError",
    "GenerationExhaustedError",
    "GeneratorConfig",
    "InputError",
    "PassGuardError",
    "PasswordPolicyConfig",
    "Settings",
    "get_settings",
]
