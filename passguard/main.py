"""Console entry point for passguard."""

import sys

from passguard.presentation.cli import main as cli_main


def main() -> None:
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
