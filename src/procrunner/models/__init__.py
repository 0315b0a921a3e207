"""Model package for procrunner."""

from procrunner.models.execution_options import ExecutionOptions
from procrunner.models.resolved_shell import ResolvedShell
from procrunner.models.runner_config import (
    DEFAULT_KILL_TIMEOUT,
    DEFAULT_READ_CHUNK_SIZE,
    RunnerConfig,
)

__all__ = [
    "DEFAULT_KILL_TIMEOUT",
    "DEFAULT_READ_CHUNK_SIZE",
    "ExecutionOptions",
    "ResolvedShell",
    "RunnerConfig",
]
