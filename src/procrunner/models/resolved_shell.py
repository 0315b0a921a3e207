"""Resolved shell model used to spawn the child process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from procrunner.shell.variants import ShellVariant


@dataclass(frozen=True)
class ResolvedShell:
    """Which shell runs the command and the exact argv it is given."""

    variant: ShellVariant
    executable: str
    arguments: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]
