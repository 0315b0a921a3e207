"""Cross-platform shell command execution with streamed output."""

from procrunner.channel import ChannelClosedError, LineChannel
from procrunner.errors import ProcessServiceError, ProcessStartError, UnsupportedPlatformError
from procrunner.models import ExecutionOptions, ResolvedShell, RunnerConfig
from procrunner.service import ProcessService
from procrunner.shell import ShellVariant

__version__ = "0.1.0"

__all__ = [
    "ChannelClosedError",
    "ExecutionOptions",
    "LineChannel",
    "ProcessService",
    "ProcessServiceError",
    "ProcessStartError",
    "ResolvedShell",
    "RunnerConfig",
    "ShellVariant",
    "UnsupportedPlatformError",
]
