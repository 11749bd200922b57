"""
Password Domain Services
"""

from .password_generator import (
    PasswordGenerator,
    generate_default_password,
)

__all__ = [
    "PasswordGenerator",
    "generate_default_password",
]
