"""
passguard command line

Interactive password setup plus non-interactive generate and check commands.

Usage:
    passguard
    passguard interactive --max-tries 5 --explain
    passguard generate --count 3
    passguard check --username alice Passw0rd
    passguard check --policy default Ab1
"""

import argparse
import sys
from typing import TextIO

from passguard.core.config import get_settings
from passguard.core.errors import InputError, PassGuardError
from passguard.core.logging import (
    LogConfig,
    clear_context,
    configure_logging,
    get_logger,
    log_context,
)
from passguard.domain.rules.password_policy import PasswordPolicy
from passguard.domain.rules.policy_registry import POLICY_REGISTRY, get_policy
from passguard.domain.services.password_generator import (
    PasswordGenerator,
    get_default_generator,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_WEAK = 1
EXIT_INTERRUPTED = 130


class InteractiveSession:
    """
    The interactive password setup flow.

    Reads a username, shows a generated default password, and optionally
    keeps asking for a custom password until the strong policy accepts it.
    The retry loop stops early on end of input or after ``max_tries``
    rejected passwords when a limit is set.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        generator: PasswordGenerator | None = None,
        policy: PasswordPolicy | None = None,
        max_tries: int | None = None,
        explain: bool = False,
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.generator = generator
        self.policy = policy
        self.max_tries = max_tries or None
        self.explain = explain

    def _write(self, text: str) -> None:
        print(text, file=self.stdout)

    def prompt(self, text: str) -> str:
        """Show ``text`` and return the next input line, stripped."""
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise InputError("End of input while waiting for a response", prompt=text.strip())
        return line.strip()

    def run(self) -> int:
        generator = self.generator or get_default_generator()
        policy = self.policy or get_policy("strong", get_settings().password)

        username = self.prompt("Enter username: ")
        log_context(session_user=username)
        try:
            default_password = generator.generate(username)
            self._write("Generating a default password...")
            self._write(f"Generated default password: {default_password}")

            choice = self.prompt("Manually change password? (y/n): ")
            if choice not in ("y", "Y"):
                self._write("You chose not to change your password.")
                logger.info("Kept generated password")
                return EXIT_OK

            return self._custom_password_loop(username, policy)
        finally:
            clear_context()

    def _custom_password_loop(self, username: str, policy: PasswordPolicy) -> int:
        tries = 0
        while self.max_tries is None or tries < self.max_tries:
            tries += 1
            custom_password = self.prompt("Enter new password: ")

            if policy.is_compliant(username, custom_password):
                self._write("Strong password!")
                self._write(f"Successfully created password: {custom_password}")
                logger.info("Custom password accepted", tries=tries)
                return EXIT_OK

            self._write("Your password is weak. Try again!")
            if self.explain:
                for violation in policy.validate(username, custom_password):
                    self._write(f"  - {violation.description}")
            logger.info("Custom password rejected", tries=tries)

        self._write(f"No strong password after {tries} tries. Giving up.")
        logger.warning("Custom password tries exhausted", tries=tries)
        return EXIT_WEAK


def run_generate(args: argparse.Namespace, stdout: TextIO) -> int:
    generator = get_default_generator()
    for _ in range(args.count):
        print(generator.generate(args.username), file=stdout)
    return EXIT_OK


def run_check(args: argparse.Namespace, stdout: TextIO) -> int:
    policy = get_policy(args.policy, get_settings().password)
    violations = policy.validate(args.username, args.password)
    if not violations:
        print("ok", file=stdout)
        return EXIT_OK

    print("weak", file=stdout)
    for violation in violations:
        print(f"  - {violation.description}", file=stdout)
    return EXIT_WEAK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passguard",
        description="Create a password that satisfies the password policy",
    )
    subparsers = parser.add_subparsers(dest="command")

    interactive = subparsers.add_parser(
        "interactive", help="Generate a default password and optionally choose your own (default)"
    )
    interactive.add_argument(
        "--max-tries",
        type=int,
        default=0,
        help="Give up after this many weak passwords (0 means keep asking)",
    )
    interactive.add_argument(
        "--explain",
        action="store_true",
        help="List the rules a rejected password fails",
    )

    generate = subparsers.add_parser("generate", help="Print generated default passwords")
    generate.add_argument("--username", default="", help="Username to generate for")
    generate.add_argument("-c", "--count", type=int, default=1, help="Number of passwords")

    check = subparsers.add_parser("check", help="Check a password against a policy")
    check.add_argument("password", help="Password to check")
    check.add_argument("--username", default="", help="Username the password belongs to")
    check.add_argument(
        "--policy",
        choices=sorted(POLICY_REGISTRY),
        default="strong",
        help="Policy to check against (default: strong)",
    )

    return parser


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Entry point for the ``passguard`` command."""
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        configure_logging(LogConfig.from_settings(settings, stream=stderr))
        logger.debug("Settings loaded", command=args.command, **settings.to_dict())

        if args.command == "generate":
            if args.count < 1:
                parser.error("--count must be at least 1")
            return run_generate(args, stdout)
        if args.command == "check":
            return run_check(args, stdout)

        max_tries = getattr(args, "max_tries", 0)
        if max_tries < 0:
            parser.error("--max-tries cannot be negative")

        session = InteractiveSession(
            stdin=stdin,
            stdout=stdout,
            max_tries=max_tries,
            explain=getattr(args, "explain", False),
        )
        return session.run()

    except PassGuardError as e:
        logger.debug("Command failed", error=e.to_dict(include_internal=True))
        print(f"\n{e.user_message}", file=stderr)
        if e.recovery_hint:
            print(e.recovery_hint, file=stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("\nInterrupted.", file=stderr)
        return EXIT_INTERRUPTED
