"""Tests for scripts/release_check.py."""

import importlib.util
from pathlib import Path

import pytest

import procrunner

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(scope="module")
def release_check():
    spec = importlib.util.spec_from_file_location(
        "release_check", ROOT / "scripts" / "release_check.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestReleaseCheck:
    def test_repository_versions_agree(self, release_check):
        version = release_check.load_project_version(ROOT / "pyproject.toml")
        release_check.check_module_version(version, procrunner.__version__)

    def test_missing_version_exits(self, release_check, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n', encoding="utf-8")
        with pytest.raises(SystemExit):
            release_check.load_project_version(pyproject)

    def test_module_version_mismatch_exits(self, release_check):
        with pytest.raises(SystemExit, match="Version mismatch"):
            release_check.check_module_version("1.0.0", "0.9.0")

    def test_matching_tag_passes(self, release_check):
        release_check.validate_release_tag("v1.2.3", "1.2.3")

    @pytest.mark.parametrize("ref_name", ["1.2.3", "v1.2", "v1.2.3-rc1", "main"])
    def test_malformed_tag_exits(self, release_check, ref_name):
        with pytest.raises(SystemExit, match="Invalid release tag"):
            release_check.validate_release_tag(ref_name, "1.2.3")

    def test_tag_for_other_version_exits(self, release_check):
        with pytest.raises(SystemExit, match="mismatch"):
            release_check.validate_release_tag("v1.2.4", "1.2.3")
