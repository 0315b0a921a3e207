"""Release gate: the pushed tag, pyproject.toml and procrunner agree on the version."""

from __future__ import annotations

import os
import re
from pathlib import Path

import tomllib

TAG_RE = re.compile(r"v(\d+\.\d+\.\d+)")


def load_project_version(pyproject: Path = Path("pyproject.toml")) -> str:
    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    project_version = data.get("project", {}).get("version")
    if not isinstance(project_version, str) or not project_version:
        raise SystemExit(f"Could not find project.version in {pyproject}")
    return project_version


def check_module_version(project_version: str, module_version: str) -> None:
    if project_version != module_version:
        raise SystemExit(
            "Version mismatch: pyproject.toml project.version="
            f"{project_version} != procrunner.__version__={module_version}"
        )


def validate_release_tag(ref_name: str, project_version: str) -> None:
    match = TAG_RE.fullmatch(ref_name)
    if match is None:
        raise SystemExit(f"Invalid release tag format. Expected vX.Y.Z, got: {ref_name}")
    if match.group(1) != project_version:
        raise SystemExit(
            f"Release tag mismatch: tag={ref_name} project.version={project_version}"
        )


def main() -> None:
    import procrunner

    project_version = load_project_version()
    check_module_version(project_version, procrunner.__version__)

    ref_name = os.getenv("GITHUB_REF_NAME")
    if ref_name:
        validate_release_tag(ref_name, project_version)
        print(f"Release check passed: {ref_name} == {project_version}")
    else:
        print(f"Version check passed: {project_version}")


if __name__ == "__main__":
    main()
