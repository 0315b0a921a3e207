"""Shell selection: which interpreter runs a command line on this OS."""

from procrunner.shell.detection import resolve_shell
from procrunner.shell.variants import (
    POWERSHELL_EXIT_SUFFIX,
    ShellVariant,
    compose,
    encode_powershell_command,
    host_os_family,
    select_variants,
)

__all__ = [
    "POWERSHELL_EXIT_SUFFIX",
    "ShellVariant",
    "compose",
    "encode_powershell_command",
    "host_os_family",
    "resolve_shell",
    "select_variants",
]
