# Logging adapter for library-wide diagnostics
from taskwork.adapters.logging_adapter import LoggingAdapter

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class TaskworkSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }
    TASKWORK_LOG_LEVEL: str = "INFO"
    TASKWORK_RETRY_ATTEMPTS: int = Field(default=3, ge=1)
    # seconds; lower bound of the range when TASKWORK_RETRY_SLEEP_MAX is set
    TASKWORK_RETRY_SLEEP: float = Field(default=10.0, ge=0)
    TASKWORK_RETRY_SLEEP_MAX: Optional[float] = Field(default=None, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> TaskworkSettings:
    """Read the environment once, on first use rather than at import.

    Invalid values surface as a ValidationError from the first caller
    (`RetryPolicy.from_settings`, `configure_logging`), never from
    `import taskwork`. Call `get_settings.cache_clear()` to re-read.
    """
    return TaskworkSettings()


# level is applied by configure_logging from TASKWORK_LOG_LEVEL
logger = LoggingAdapter()
