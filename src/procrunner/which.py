"""Locate executables on PATH and in extra lookup directories."""

import os
from collections.abc import Iterator


def _lookup_dirs(additional_paths: tuple[str, ...]) -> Iterator[str]:
    """Yield PATH entries in order, followed by the additional directories."""
    path_env = os.environ.get("PATH", "")
    for raw_dir in path_env.split(os.pathsep):
        if raw_dir:
            yield raw_dir
    yield from additional_paths or (os.getcwd(),)


def _search(name: str, additional_paths: tuple[str, ...]) -> Iterator[str]:
    for path_dir in _lookup_dirs(additional_paths):
        full_path = os.path.join(path_dir, name)
        if os.path.isfile(full_path):
            yield os.path.abspath(full_path)


def which(name: str, *additional_paths: str) -> Iterator[str]:
    """Yield every path where a file called ``name`` exists.

    PATH is searched first, then ``additional_paths`` (the current working
    directory when none are given). Nothing is cached: PATH is re-read each
    time the function is called.
    """
    if not name:
        raise ValueError("executable file name must not be empty")
    return _search(name, additional_paths)
