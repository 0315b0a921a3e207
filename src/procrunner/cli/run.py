"""Run-a-command CLI implementation."""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from procrunner import __version__
from procrunner.cli.shared import configure_logging, parse_assignment
from procrunner.errors import ProcessServiceError
from procrunner.models import ExecutionOptions
from procrunner.service import ProcessService

log = logging.getLogger(__name__)

# Same convention as coreutils `timeout`.
TIMEOUT_EXIT_CODE = 124


def build_parser() -> argparse.ArgumentParser:
    """Build parser for command execution mode."""
    parser = argparse.ArgumentParser(
        prog="procrunner",
        description="Run a command line through the host OS shell and stream its output",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-C", "--cwd", help="Working directory for the command")
    parser.add_argument(
        "--encoding",
        help="Encoding of the command's output (default: platform preferred encoding)",
    )
    parser.add_argument(
        "--retain",
        action="append",
        metavar="NAME",
        help="Only pass the named environment variables through (repeatable)",
    )
    parser.add_argument(
        "--env",
        action="append",
        type=parse_assignment,
        default=[],
        metavar="NAME=VALUE",
        help="Set an environment variable for the command (repeatable)",
    )
    parser.add_argument(
        "--unset",
        action="append",
        default=[],
        metavar="NAME",
        help="Remove an environment variable for the command (repeatable)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Cancel the command after this many seconds",
    )
    parser.add_argument(
        "words",
        nargs=argparse.REMAINDER,
        metavar="command",
        help="The command line to run; multiple words are joined with spaces. "
        "Options must come before the command.",
    )
    return parser


async def _execute(command: str, options: ExecutionOptions, timeout: float | None) -> int:
    service = ProcessService()
    if timeout is not None:
        asyncio.get_running_loop().call_later(timeout, options.cancel_event.set)
    return await service.execute(command, options)


def run(argv: list[str]) -> int:
    """Execute a command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.words:
        parser.error("the following arguments are required: command")
    configure_logging(args.debug)

    surrogate: dict[str, str | None] = {name: None for name in args.unset}
    surrogate.update(dict(args.env))
    try:
        options = ExecutionOptions(
            working_directory=args.cwd,
            stdout_writer=sys.stdout,
            stderr_writer=sys.stderr,
            stdout_encoding=args.encoding,
            stderr_encoding=args.encoding,
            retained_variables=args.retain,
            surrogate_variables=surrogate,
            cancel_event=asyncio.Event() if args.timeout is not None else None,
            line_separator="\n",
        )
    except LookupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    command = " ".join(args.words)
    log.debug("command=%r", command)
    try:
        return asyncio.run(_execute(command, options, args.timeout))
    except asyncio.CancelledError:
        print(f"Error: command timed out after {args.timeout}s", file=sys.stderr)
        return TIMEOUT_EXIT_CODE
    except (ProcessServiceError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
