"""Per-call execution options."""

import asyncio
import codecs
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from procrunner.channel import LineChannel


@dataclass
class ExecutionOptions:
    """How one command is executed and where its output goes.

    Every field is optional. Encodings default to the platform's preferred
    encoding and the working directory defaults to the current directory,
    both resolved when the command is executed. A writer is any object with
    ``write(str)`` and ``flush()``; awaitable results are awaited.
    """

    working_directory: str | None = None
    stdout_writer: Any = None
    stderr_writer: Any = None
    stdout_channel: LineChannel | None = None
    stderr_channel: LineChannel | None = None
    stdout_encoding: str | None = None
    stderr_encoding: str | None = None
    stdin_encoding: str | None = None
    retained_variables: Iterable[str] | None = None
    surrogate_variables: Mapping[str, str | None] = field(default_factory=dict)
    cancel_event: asyncio.Event | None = None
    input: str | None = None
    line_separator: str = ""

    def __post_init__(self) -> None:
        for encoding in (self.stdout_encoding, self.stderr_encoding, self.stdin_encoding):
            if encoding is not None:
                codecs.lookup(encoding)
        if self.retained_variables is not None:
            self.retained_variables = frozenset(self.retained_variables)
