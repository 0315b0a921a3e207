"""Command-line interface for procrunner."""

from procrunner.cli.app import entrypoint, main

__all__ = ["entrypoint", "main"]
