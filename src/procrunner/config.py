"""Configuration for procrunner."""

import logging
import os

from procrunner.models import RunnerConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "PROCRUNNER_"


def load_config() -> RunnerConfig:
    """Build a RunnerConfig from PROCRUNNER_* environment variables."""
    values: dict[str, str] = {}
    for field_name in RunnerConfig.model_fields:
        raw = os.environ.get(ENV_PREFIX + field_name.upper())
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()
    log.debug("config overrides from environment: %s", values)
    return RunnerConfig(**values)
