"""
Character Classes

ASCII character classification used by the password rules.

Only ``a-z``, ``A-Z`` and ``0-9`` classify as letters or digits. Anything
else, including accented letters, non-Latin digits and strings that are not
exactly one character long, classifies as false for every class.
"""

ASCII_LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
ASCII_UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ASCII_DIGITS = "0123456789"
ASCII_LETTERS = ASCII_LOWERCASE + ASCII_UPPERCASE
ALPHANUMERIC = ASCII_LOWERCASE + ASCII_UPPERCASE + ASCII_DIGITS

_LOWER = frozenset(ASCII_LOWERCASE)
_UPPER = frozenset(ASCII_UPPERCASE)
_DIGITS = frozenset(ASCII_DIGITS)
_LETTERS = _LOWER | _UPPER
_ALNUM = _LETTERS | _DIGITS


def is_lower(ch: str) -> bool:
    """Check if ``ch`` is an ASCII lowercase letter."""
    return ch in _LOWER


def is_upper(ch: str) -> bool:
    """Check if ``ch`` is an ASCII uppercase letter."""
    return ch in _UPPER


def is_letter(ch: str) -> bool:
    """Check if ``ch`` is an ASCII letter."""
    return ch in _LETTERS


def is_digit(ch: str) -> bool:
    """Check if ``ch`` is an ASCII digit."""
    return ch in _DIGITS


def is_alphanumeric(ch: str) -> bool:
    """Check if ``ch`` is an ASCII letter or digit."""
    return ch in _ALNUM


def fold_case(text: str) -> str:
    """Lowercase ASCII letters only, leaving every other character as is."""
    return text.translate(_FOLD_TABLE)


_FOLD_TABLE = str.maketrans(ASCII_UPPERCASE, ASCII_LOWERCASE)
