"""Top-level CLI router."""

import sys

from . import run as run_cmd
from . import which as which_cmd


def main(argv: list[str] | None = None) -> int:
    """Route to command execution or executable lookup."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == "which":
        return which_cmd.run(args[1:])
    return run_cmd.run(args)


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
