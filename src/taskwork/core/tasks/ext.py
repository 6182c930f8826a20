"""Free-function helpers to decorate or offload any Task."""

from typing import Optional, TypeVar

from taskwork.adapters.spawn_asyncio import spawn, spawn_blocking
from taskwork.core.config import RetryPolicy
from taskwork.core.interfaces.task import Task
from taskwork.core.tasks.retrying_task import RetryingTask

T = TypeVar("T")

__all__ = ["with_retry", "spawn", "spawn_blocking"]


def with_retry(task: Task[T], policy: Optional[RetryPolicy] = None) -> RetryingTask[T]:
    """Wrap `task` with `policy` (default RetryPolicy() when omitted)."""
    return (policy or RetryPolicy()).build_task(task)
