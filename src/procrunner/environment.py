"""Environment shaping for child processes."""

import os
from collections.abc import Iterable, Mapping


def _key(name: str) -> str:
    # Windows environment names are case-insensitive.
    return name.upper() if os.name == "nt" else name


def build_child_environment(
    base: Mapping[str, str],
    retained: Iterable[str] | None = None,
    surrogate: Mapping[str, str | None] | None = None,
) -> dict[str, str]:
    """Return the environment block for a child process.

    When ``retained`` is given every variable not named in it is dropped.
    ``surrogate`` values are applied afterwards and always win; a ``None``
    value removes the variable. ``base`` is never modified.
    """
    env = dict(base)
    if retained is not None:
        keep = {_key(name) for name in retained}
        env = {name: value for name, value in env.items() if _key(name) in keep}

    for name, value in (surrogate or {}).items():
        for existing in [k for k in env if _key(k) == _key(name)]:
            del env[existing]
        if value is not None:
            env[name] = value
    return env
