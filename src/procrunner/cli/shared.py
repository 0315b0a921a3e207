"""Shared CLI helpers."""

import argparse
import logging


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )


def parse_assignment(value: str) -> tuple[str, str]:
    """Parse a NAME=VALUE argument."""
    name, sep, text = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got: {value!r}")
    return name, text
