"""`procrunner which` command implementation."""

import argparse
import sys

from procrunner.cli.shared import configure_logging
from procrunner.which import which


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procrunner which",
        description="List every location of an executable on PATH and extra directories",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("name", help="Executable file name, e.g. git or cmd.exe")
    parser.add_argument(
        "dirs",
        nargs="*",
        metavar="DIR",
        help="Extra directories searched after PATH (default: current directory)",
    )
    return parser


def run(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    try:
        matches = which(args.name, *args.dirs)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    found = False
    for path in matches:
        print(path)
        found = True
    return 0 if found else 1
