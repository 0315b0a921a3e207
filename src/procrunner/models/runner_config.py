"""Configuration model for procrunner."""

from pydantic import BaseModel, Field

DEFAULT_READ_CHUNK_SIZE = 8192
DEFAULT_KILL_TIMEOUT = 5.0


class RunnerConfig(BaseModel):
    """Runtime tuning shared by every execute call of a service."""

    read_chunk_size: int = Field(default=DEFAULT_READ_CHUNK_SIZE, gt=0)
    # Seconds to wait for a killed child to be reaped before giving up.
    kill_timeout: float = Field(default=DEFAULT_KILL_TIMEOUT, ge=0)
