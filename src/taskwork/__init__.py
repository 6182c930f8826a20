"""Composable asynchronous tasks: retry with backoff, liveness latches and thread offload."""

from taskwork.adapters.spawn_asyncio import spawn, spawn_blocking
from taskwork.core.config import RetryPolicy
from taskwork.core.exceptions import AlreadyDead, InternalContractViolation, TaskworkError
from taskwork.core.interfaces.task import Task
from taskwork.core.logging_config import configure_logging
from taskwork.core.managers.success_tracking_latch import SuccessTrackingLatch
from taskwork.core.models.sleep_spec import FixedSleep, RangeSleep, SleepSpec
from taskwork.core.tasks.ext import with_retry
from taskwork.core.tasks.function_task import FunctionTask
from taskwork.core.tasks.retrying_task import RetryingTask

__all__ = [
    "AlreadyDead",
    "FixedSleep",
    "FunctionTask",
    "InternalContractViolation",
    "RangeSleep",
    "RetryPolicy",
    "RetryingTask",
    "SleepSpec",
    "SuccessTrackingLatch",
    "Task",
    "TaskworkError",
    "configure_logging",
    "spawn",
    "spawn_blocking",
    "with_retry",
]
