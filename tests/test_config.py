"""Unit tests for procrunner.config."""

import pytest
from pydantic import ValidationError

from procrunner.config import load_config
from procrunner.models import DEFAULT_KILL_TIMEOUT, DEFAULT_READ_CHUNK_SIZE, RunnerConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PROCRUNNER_READ_CHUNK_SIZE", raising=False)
    monkeypatch.delenv("PROCRUNNER_KILL_TIMEOUT", raising=False)


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config.read_chunk_size == DEFAULT_READ_CHUNK_SIZE
        assert config.kill_timeout == DEFAULT_KILL_TIMEOUT

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PROCRUNNER_READ_CHUNK_SIZE", "1024")
        monkeypatch.setenv("PROCRUNNER_KILL_TIMEOUT", " 0.5 ")
        config = load_config()
        assert config.read_chunk_size == 1024
        assert config.kill_timeout == 0.5

    def test_blank_values_are_ignored(self, monkeypatch):
        monkeypatch.setenv("PROCRUNNER_READ_CHUNK_SIZE", "  ")
        assert load_config().read_chunk_size == DEFAULT_READ_CHUNK_SIZE

    def test_invalid_value_raises(self, monkeypatch):
        monkeypatch.setenv("PROCRUNNER_READ_CHUNK_SIZE", "lots")
        with pytest.raises(ValidationError):
            load_config()


class TestRunnerConfig:
    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            RunnerConfig(read_chunk_size=0)

    def test_kill_timeout_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            RunnerConfig(kill_timeout=-1)
