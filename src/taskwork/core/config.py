"""Configuration models for task decorators.

`RetryPolicy` is an immutable value: every `with_*` call validates and
returns a new instance, leaving the original untouched.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, Field, field_validator

from taskwork.core.interfaces.task import Task
from taskwork.core.models.sleep_spec import FixedSleep, RangeSleep, SleepSpec
from taskwork.core.settings import get_settings
from taskwork.core.tasks.function_task import FunctionTask
from taskwork.core.tasks.retrying_task import RetryingTask

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_SLEEP_SECONDS = 10.0


class RetryPolicy(BaseModel):
    """Retry configuration: how many attempts, and how long to wait between them.

    Attributes:
        max_attempts: Total number of invocations allowed (first call included)
        sleep: Wait between a failed attempt and the next one
        retry_on: Exception types that trigger another attempt
    """

    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=1,
        description="Maximum number of attempts, including the first one",
    )

    sleep: Union[FixedSleep, RangeSleep] = Field(
        default=FixedSleep(duration=DEFAULT_SLEEP_SECONDS),
        description="Wait between attempts; never applied after the last attempt",
    )

    retry_on: Tuple[Type[BaseException], ...] = Field(
        default=(Exception,),
        description="Only these exception types are retried; others propagate at once",
    )

    model_config = {
        "frozen": True,  # Immutable after creation
        "extra": "forbid",  # Reject unknown fields
    }

    @field_validator("sleep", mode="before")
    @classmethod
    def coerce_sleep(cls, value: Any) -> Any:
        # dumped policies carry the spec as a plain mapping
        if isinstance(value, dict):
            return value
        return SleepSpec.of(value)

    @field_validator("retry_on", mode="before")
    @classmethod
    def coerce_retry_on(cls, value: Any) -> Any:
        if isinstance(value, type):
            return (value,)
        return value

    @classmethod
    def from_settings(cls, settings=None) -> "RetryPolicy":
        """Factory method to construct a policy from TaskworkSettings.

        Args:
            settings: TaskworkSettings instance; defaults to `get_settings()`

        Returns:
            RetryPolicy with attempts and sleep taken from the environment
        """
        if settings is None:
            settings = get_settings()
        if settings.TASKWORK_RETRY_SLEEP_MAX is not None:
            sleep: SleepSpec = RangeSleep(
                minimum=settings.TASKWORK_RETRY_SLEEP,
                maximum=settings.TASKWORK_RETRY_SLEEP_MAX,
            )
        else:
            sleep = FixedSleep(duration=settings.TASKWORK_RETRY_SLEEP)
        return cls(max_attempts=settings.TASKWORK_RETRY_ATTEMPTS, sleep=sleep)

    def evolve(self, **changes: Any) -> "RetryPolicy":
        """Return a validated copy with `changes` applied."""
        return type(self)(**{**dict(self), **changes})

    def with_attempts(self, max_attempts: int) -> "RetryPolicy":
        return self.evolve(max_attempts=max_attempts)

    def with_sleep(self, sleep: Any) -> "RetryPolicy":
        """Return a copy waiting `sleep` between attempts.

        Accepts a SleepSpec, seconds, a timedelta, or a (min, max) pair.
        """
        return self.evolve(sleep=sleep)

    def with_retry_on(self, *exception_types: Type[BaseException]) -> "RetryPolicy":
        return self.evolve(retry_on=exception_types)

    def build_task(self, task: Task[T], retry_port: Optional[Any] = None) -> RetryingTask[T]:
        """Wrap `task` so that each call runs a full retry loop. Nothing runs yet."""
        return RetryingTask(task, self, retry_port=retry_port)

    async def run(self, task: Task[T]) -> T:
        return await self.build_task(task).call()

    async def run_fn(self, func: Callable[[], Awaitable[T]]) -> T:
        return await self.run(FunctionTask(func))
