"""Shell variants and how each one is asked to run a command line."""

import base64
import platform
from enum import Enum

from procrunner.errors import UnsupportedPlatformError

# PowerShell swallows the exit code of the last statement unless it is
# re-emitted explicitly.
POWERSHELL_EXIT_SUFFIX = "; exit $LASTEXITCODE"

POWERSHELL_FLAGS = (
    "-NoLogo",
    "-Mta",
    "-NoProfile",
    "-NonInteractive",
    "-WindowStyle",
    "Hidden",
    "-EncodedCommand",
)


class ShellVariant(Enum):
    """A shell that procrunner knows how to drive, valued by its executable name."""

    POWERSHELL = "powershell.exe"
    PWSH_CORE = "pwsh.exe"
    CMD_EXE = "cmd.exe"
    POSIX_SHELL = "sh"
    ZSH = "zsh"

    @property
    def executable(self) -> str:
        return self.value


SHELLS_BY_OS: dict[str, tuple[ShellVariant, ...]] = {
    "Windows": (ShellVariant.POWERSHELL, ShellVariant.CMD_EXE, ShellVariant.PWSH_CORE),
    "Linux": (ShellVariant.POSIX_SHELL,),
    "Darwin": (ShellVariant.ZSH,),
}


def host_os_family() -> str:
    """Return the OS family name as reported by :func:`platform.system`."""
    return platform.system()


def select_variants(os_family: str | None = None) -> list[ShellVariant]:
    """Return the shell variants to try, in priority order, for an OS family."""
    family = host_os_family() if os_family is None else os_family
    try:
        return list(SHELLS_BY_OS[family])
    except KeyError:
        raise UnsupportedPlatformError(family or platform.platform()) from None


def encode_powershell_command(command: str) -> str:
    """Return the ``-EncodedCommand`` payload for a PowerShell command line."""
    script = command + POWERSHELL_EXIT_SUFFIX
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


def compose(variant: ShellVariant, command: str) -> tuple[str, list[str]]:
    """Return (executable name, argument vector) running ``command`` in ``variant``."""
    if variant is ShellVariant.POSIX_SHELL:
        return variant.executable, ["-c", command]
    if variant is ShellVariant.ZSH:
        return variant.executable, ["-l", "-c", command]
    if variant is ShellVariant.CMD_EXE:
        return variant.executable, ["/U", "/C", command]
    return variant.executable, [*POWERSHELL_FLAGS, encode_powershell_command(command)]
