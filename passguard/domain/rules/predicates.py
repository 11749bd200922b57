"""
Password Predicates

Pure checks over a whole password. Every predicate is defined for any
string, including the empty string, and never raises.
"""

from .character_classes import (
    fold_case,
    is_alphanumeric,
    is_digit,
    is_letter,
    is_lower,
    is_upper,
)

DEFAULT_MIN_LENGTH = 8
DEFAULT_LETTER_RUN = 4


def has_minimum_length(password: str, minimum: int = DEFAULT_MIN_LENGTH) -> bool:
    """Check that the password has at least ``minimum`` characters."""
    return len(password) >= minimum


def has_max_length(password: str, maximum: int) -> bool:
    """Check that the password has at most ``maximum`` characters."""
    return len(password) <= maximum


def has_upper(password: str) -> bool:
    return any(is_upper(ch) for ch in password)


def has_lower(password: str) -> bool:
    return any(is_lower(ch) for ch in password)


def has_digit(password: str) -> bool:
    return any(is_digit(ch) for ch in password)


def is_alphanumeric_only(password: str) -> bool:
    """Check that every character is an ASCII letter or digit.

    The empty string passes; length is checked by other rules.
    """
    return all(is_alphanumeric(ch) for ch in password)


def has_consecutive_letters(password: str, k: int = DEFAULT_LETTER_RUN) -> bool:
    """
    Check for a contiguous run of at least ``k`` letters.

    Scans left to right, resetting the run on any non-letter, and returns
    as soon as the run reaches ``k``.
    """
    if k <= 0:
        return True

    run = 0
    for ch in password:
        if is_letter(ch):
            run += 1
            if run >= k:
                return True
        else:
            run = 0
    return False


def contains_username(username: str, password: str) -> bool:
    """
    Check whether ``username`` appears in ``password`` ignoring ASCII case.

    An empty username is never considered contained, and a username longer
    than the password cannot be contained.
    """
    if not username:
        return False

    size = len(username)
    if size > len(password):
        return False

    needle = fold_case(username)
    haystack = fold_case(password)
    for start in range(len(haystack) - size + 1):
        if haystack[start:start + size] == needle:
            return True
    return False


__all__ = [
    "DEFAULT_LETTER_RUN",
    "DEFAULT_MIN_LENGTH",
    "contains_username",
    "has_consecutive_letters",
    "has_digit",
    "has_lower",
    "has_max_length",
    "has_minimum_length",
    "has_upper",
    "is_alphanumeric_only",
]
