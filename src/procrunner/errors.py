"""Errors raised by procrunner."""


class ProcessServiceError(Exception):
    """Base class for failures while preparing or starting a child process."""


class UnsupportedPlatformError(ProcessServiceError):
    """No shell is known for, or could be located on, the host OS."""

    def __init__(self, os_description: str) -> None:
        super().__init__(f"Process creation in: {os_description} is not supported.")
        self.os_description = os_description


class ProcessStartError(ProcessServiceError):
    """The OS refused to create the child process."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Failed to execute command: {command}")
        self.command = command
