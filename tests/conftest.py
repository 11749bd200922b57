"""
Global pytest configuration and fixtures for all tests.

Provides:
- Isolated settings (no PASSGUARD_* variables leak between tests)
- Quiet logging
- Seeded random sources and fake usernames
"""

import os
import random

import pytest
from faker import Faker

from passguard.core.config import reset_settings
from passguard.core.enums import Environment, LogLevel
from passguard.core.logging import LogConfig, configure_logging

fake = Faker()


class ScriptedRandom:
    """Random source replaying fixed lengths and characters."""

    def __init__(self, lengths, characters):
        self.lengths = list(lengths)
        self.characters = list(characters)
        self.randint_calls = []

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        return self.lengths.pop(0)

    def choice(self, seq):
        ch = self.characters.pop(0)
        assert ch in seq
        return ch


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Remove PASSGUARD_* variables and clear cached settings."""
    for key in list(os.environ):
        if key.startswith("PASSGUARD_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output free of log lines."""
    configure_logging(LogConfig(level=LogLevel.ERROR, environment=Environment.TESTING))
    yield


@pytest.fixture
def seeded_rng():
    """Deterministic random source."""
    return random.Random(20250227)


@pytest.fixture
def username():
    """A realistic random username."""
    return fake.user_name()


@pytest.fixture
def scripted_random():
    """Factory for random sources that replay fixed draws."""
    return ScriptedRandom
