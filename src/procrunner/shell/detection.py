"""Shell resolution for the host OS."""

import logging
import os
import platform

from procrunner.errors import UnsupportedPlatformError
from procrunner.models import ResolvedShell
from procrunner.shell.variants import compose, select_variants
from procrunner.which import which

log = logging.getLogger(__name__)


def _resolve_executable(executable: str) -> str | None:
    """Return ``executable`` if it is an existing file, else its first PATH match."""
    if os.path.isfile(executable):
        return executable
    return next(which(executable), None)


def resolve_shell(command: str, os_family: str | None = None) -> ResolvedShell:
    """Pick the first shell variant whose executable can be located."""
    for variant in select_variants(os_family):
        executable, arguments = compose(variant, command)
        resolved = _resolve_executable(executable)
        if resolved is None:
            log.debug("shell %s not found, trying next", executable)
            continue
        log.debug("using shell %s at %s", variant.name, resolved)
        return ResolvedShell(variant=variant, executable=resolved, arguments=tuple(arguments))
    raise UnsupportedPlatformError(platform.platform())
