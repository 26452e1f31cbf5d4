"""Entry point for the Exa CLI.

Usage:
    python -m exa_cli <command> [args...]
    exa <command> [args...]          (after pip install -e .)
"""

import sys

from exa_cli.adapters.cli import run_cli


def main() -> int:
    run_cli()
    return 0


if __name__ == "__main__":
    sys.exit(main())
