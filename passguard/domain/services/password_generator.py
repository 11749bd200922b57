"""Password generator service.

Generates random alphanumeric passwords that satisfy the default policy by
sampling whole candidates until one is accepted.
"""

import secrets
import time
from collections.abc import Callable, Sequence
from typing import Protocol

from passguard.core.config import GeneratorConfig, get_settings
from passguard.core.errors import ConfigurationError, GenerationExhaustedError
from passguard.core.logging import get_logger
from passguard.domain.rules.character_classes import (
    ALPHANUMERIC,
    ASCII_DIGITS,
    ASCII_LOWERCASE,
    ASCII_UPPERCASE,
)
from passguard.domain.rules.password_policy import PasswordPolicy
from passguard.domain.rules.policy_registry import DEFAULT_POLICY, get_policy

logger = get_logger(__name__)


class RandomSource(Protocol):
    """The subset of ``random.Random`` the generator draws from."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[str]) -> str: ...


class PasswordGenerator:
    """
    Generates passwords accepted by a policy, the default policy unless
    another is given.

    Each attempt draws a length uniformly from the configured range, then
    that many characters uniformly from the alphabet. A rejected candidate
    is discarded whole. Generation stops with ``GenerationExhaustedError``
    once ``max_attempts`` candidates were rejected or ``timeout_seconds``
    has elapsed.

    The random source belongs to the generator. Without one, a
    ``secrets.SystemRandom`` is used.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        policy: PasswordPolicy | None = None,
        alphabet: str = ALPHANUMERIC,
        config: GeneratorConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.rng = rng or secrets.SystemRandom()
        self.policy = policy or DEFAULT_POLICY
        self.alphabet = alphabet
        self.config = config or GeneratorConfig()
        self._clock = clock

        self._check_alphabet()

    def _check_alphabet(self) -> None:
        required = {
            "lowercase": ASCII_LOWERCASE,
            "uppercase": ASCII_UPPERCASE,
            "digit": ASCII_DIGITS,
        }
        missing = [
            name
            for name, characters in required.items()
            if not any(ch in characters for ch in self.alphabet)
        ]
        if missing:
            raise ConfigurationError(
                f"Generator alphabet has no {', '.join(missing)} characters",
                config_key="alphabet",
            )

    def _draw_candidate(self) -> str:
        length = self.rng.randint(self.config.min_length, self.config.max_length)
        return "".join(self.rng.choice(self.alphabet) for _ in range(length))

    def generate(self, username: str = "") -> str:
        """
        Generate a password accepted by the generator's policy.

        Args:
            username: Passed to the policy; the default policy ignores it

        Returns:
            str: The accepted password

        Raises:
            GenerationExhaustedError: If the attempt or time budget runs out
        """
        timeout = self.config.timeout_seconds
        deadline = None if timeout is None else self._clock() + timeout

        attempts = 0
        while attempts < self.config.max_attempts:
            attempts += 1
            candidate = self._draw_candidate()
            if self.policy.is_compliant(username, candidate):
                logger.debug(
                    "Generated password",
                    policy=self.policy.name,
                    attempts=attempts,
                    length=len(candidate),
                )
                return candidate

            if deadline is not None and self._clock() >= deadline:
                logger.warning(
                    "Password generation timed out",
                    policy=self.policy.name,
                    attempts=attempts,
                    timeout_seconds=timeout,
                )
                raise GenerationExhaustedError(attempts, reason="timeout", policy=self.policy.name)

        logger.warning(
            "Password generation exhausted",
            policy=self.policy.name,
            attempts=attempts,
        )
        raise GenerationExhaustedError(attempts, reason="attempts", policy=self.policy.name)


_default_generator: PasswordGenerator | None = None


def get_default_generator() -> PasswordGenerator:
    """Return the process-wide generator, creating it on first use."""
    global _default_generator  # noqa: PLW0603 - created once per process

    if _default_generator is None:
        settings = get_settings()
        _default_generator = PasswordGenerator(
            policy=get_policy("default", settings.password),
            config=settings.generator,
        )
    return _default_generator


def generate_default_password(username: str = "") -> str:
    """Generate a password that satisfies the default policy."""
    return get_default_generator().generate(username)


__all__ = [
    "PasswordGenerator",
    "RandomSource",
    "generate_default_password",
    "get_default_generator",
]
