"""Run a shell command line in a child process and stream its output.

Usage:
    service = ProcessService()
    exit_code = await service.execute(
        "git status",
        ExecutionOptions(stdout_writer=sys.stdout, line_separator="\\n"),
    )

The command is handed to the host OS shell (see :mod:`procrunner.shell`).
Both output streams are pumped concurrently, line by line, into the sinks
configured for them: a text writer, a :class:`~procrunner.channel.LineChannel`,
both, or neither (output discarded).
"""

import asyncio
import codecs
import contextlib
import inspect
import itertools
import locale
import logging
import os
import re
import subprocess
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from typing import Any

from procrunner.channel import LineChannel
from procrunner.config import load_config
from procrunner.environment import build_child_environment
from procrunner.errors import ProcessStartError
from procrunner.models import ExecutionOptions, ResolvedShell, RunnerConfig
from procrunner.shell import resolve_shell
from procrunner.which import which

log = logging.getLogger(__name__)

# A line ends at \r\n, \r or \n.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class OutputSinks:
    """Where one output stream of the child goes and how it is decoded."""

    encoding: str
    writer: Any = None
    channel: LineChannel | None = None


@dataclass
class ActiveProcess:
    """Bookkeeping for a child process while its execute call is running."""

    stdout: OutputSinks
    stderr: OutputSinks
    cancel_event: asyncio.Event | None
    line_separator: str
    process: asyncio.subprocess.Process | None = None

    def cancel_requested(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class ProcessService:
    """Executes command lines through the host OS shell."""

    def __init__(self, config: RunnerConfig | None = None) -> None:
        self._config = config if config is not None else load_config()
        self._processes: dict[int, ActiveProcess] = {}
        self._tokens = itertools.count(1)

    @property
    def config(self) -> RunnerConfig:
        return self._config

    @property
    def active_processes(self) -> int:
        """Number of children currently being executed by this service."""
        return len(self._processes)

    def which(self, name: str, *additional_paths: str) -> Iterator[str]:
        """Yield paths where ``name`` exists; see :func:`procrunner.which.which`."""
        return which(name, *additional_paths)

    async def execute(self, command: str, options: ExecutionOptions | None = None) -> int:
        """Run ``command`` in the host shell and return the child's exit code.

        Raises:
            ValueError: ``command`` is empty.
            UnsupportedPlatformError: no shell could be located for this OS.
            ProcessStartError: the OS refused to start the shell.
            asyncio.CancelledError: ``options.cancel_event`` was set, or the
                calling task was cancelled, before the child finished.

        Errors raised by a writer or channel propagate unchanged.
        """
        if not command:
            raise ValueError("command must not be empty")
        options = options if options is not None else ExecutionOptions()

        shell = resolve_shell(command)
        env = build_child_environment(
            os.environ, options.retained_variables, options.surrogate_variables
        )

        default_encoding = locale.getpreferredencoding(False)
        record = ActiveProcess(
            stdout=OutputSinks(
                encoding=options.stdout_encoding or default_encoding,
                writer=options.stdout_writer,
                channel=options.stdout_channel,
            ),
            stderr=OutputSinks(
                encoding=options.stderr_encoding or default_encoding,
                writer=options.stderr_writer,
                channel=options.stderr_channel,
            ),
            cancel_event=options.cancel_event,
            line_separator=options.line_separator,
        )
        stdin_data = None
        if options.input is not None:
            stdin_data = options.input.encode(options.stdin_encoding or default_encoding)

        token = next(self._tokens)
        self._processes[token] = record
        try:
            if record.cancel_requested():
                raise asyncio.CancelledError()
            record.process = await self._spawn(command, shell, options.working_directory, env)
            exit_code = await self._run_to_exit(token, stdin_data)
        finally:
            self._processes.pop(token, None)

        for sinks in (record.stdout, record.stderr):
            if sinks.channel is not None:
                sinks.channel.complete()
            if sinks.writer is not None:
                await _maybe_await(sinks.writer.flush())

        log.debug("command exited with %s: %s", exit_code, command)
        return exit_code

    async def _spawn(
        self,
        command: str,
        shell: ResolvedShell,
        working_directory: str | None,
        env: dict[str, str],
    ) -> asyncio.subprocess.Process:
        kwargs: dict[str, Any] = {}
        if os.name == "nt":
            kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW
        try:
            process = await asyncio.create_subprocess_exec(
                shell.executable,
                *shell.arguments,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=working_directory or os.getcwd(),
                env=env,
                **kwargs,
            )
        except OSError as e:
            raise ProcessStartError(command) from e
        log.debug("started pid %s: %s", process.pid, shell.argv)
        return process

    async def _run_to_exit(self, token: int, stdin_data: bytes | None) -> int:
        record = self._processes[token]
        process = record.process
        tasks = [
            asyncio.create_task(self._pump(token, "stdout", process.stdout)),
            asyncio.create_task(self._pump(token, "stderr", process.stderr)),
            asyncio.create_task(self._feed_stdin(process.stdin, stdin_data)),
        ]
        completion = asyncio.gather(process.wait(), *tasks)
        try:
            results = await self._wait_or_cancel(completion, record.cancel_event)
        except BaseException:
            completion.cancel()
            await self._terminate(process, tasks)
            raise
        return results[0]

    async def _wait_or_cancel(
        self, completion: asyncio.Future, cancel_event: asyncio.Event | None
    ) -> list:
        if cancel_event is None:
            return await completion
        cancelled = asyncio.create_task(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {completion, cancelled}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancelled.cancel()
        if completion not in done:
            log.debug("cancellation requested, stopping child")
            raise asyncio.CancelledError()
        return completion.result()

    async def _terminate(
        self, process: asyncio.subprocess.Process, tasks: list[asyncio.Task]
    ) -> None:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        try:
            await asyncio.wait_for(process.wait(), self._config.kill_timeout)
        except asyncio.TimeoutError:
            log.debug("pid %s not reaped within %ss", process.pid, self._config.kill_timeout)

    async def _pump(self, token: int, stream_name: str, reader: asyncio.StreamReader) -> None:
        """Forward every line of one output stream to that stream's sinks."""
        record = self._processes[token]
        sinks: OutputSinks = getattr(record, stream_name)
        async with contextlib.aclosing(self._read_lines(reader, sinks.encoding)) as lines:
            async for line in lines:
                if sinks.writer is not None:
                    await _maybe_await(sinks.writer.write(line + record.line_separator))
                if sinks.channel is not None:
                    await sinks.channel.publish(line)
                if record.cancel_requested():
                    raise asyncio.CancelledError()
        if sinks.writer is not None:
            await _maybe_await(sinks.writer.flush())

    async def _read_lines(self, reader: asyncio.StreamReader, encoding: str) -> AsyncIterator[str]:
        # Decode before splitting so multi-byte encodings (UTF-16 from
        # cmd.exe /U) never get cut inside a character.
        decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        pending = ""
        while True:
            chunk = await reader.read(self._config.read_chunk_size)
            text = pending + decoder.decode(chunk, final=not chunk)
            # A \r at the end of a read may be the first half of \r\n.
            held = ""
            if chunk and text.endswith("\r"):
                text, held = text[:-1], "\r"
            *lines, pending = _LINE_BREAK.split(text)
            pending += held
            for line in lines:
                yield line
            if not chunk:
                break
        if pending:
            yield pending

    async def _feed_stdin(self, stdin: asyncio.StreamWriter, data: bytes | None) -> None:
        try:
            if data:
                stdin.write(data)
                await stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            # The child exited or closed stdin without reading everything.
            log.debug("stdin closed early: %s", e)
        finally:
            stdin.close()
