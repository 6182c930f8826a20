from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from taskwork.adapters.retry_tenacity import TenacityRetryAdapter
from taskwork.core.interfaces.retry import RetryPort
from taskwork.core.interfaces.task import Task

if TYPE_CHECKING:
    from taskwork.core.config import RetryPolicy

T = TypeVar("T")


class RetryingTask(Generic[T]):
    """Task decorator re-invoking an inner task until it succeeds or attempts run out.

    Every `call` runs an independent retry loop: the inner task is called up
    to `policy.max_attempts` times, sleeping between failed attempts. The
    first successful value is returned; after exhaustion the error raised by
    the last attempt propagates unchanged.

    The loop itself is delegated to a `RetryPort` (tenacity by default) so
    the backoff engine can be swapped in tests.
    """

    def __init__(
        self,
        inner: Task[T],
        policy: "RetryPolicy",
        retry_port: Optional[RetryPort] = None,
    ) -> None:
        self._inner = inner
        self._policy = policy
        self._retry = retry_port or TenacityRetryAdapter(
            policy, label=getattr(inner, "name", type(inner).__name__)
        )

    @property
    def inner(self) -> Task[T]:
        return self._inner

    @property
    def policy(self) -> "RetryPolicy":
        return self._policy

    async def call(self) -> T:
        return await self._retry.execute(self._inner.call)

    def __repr__(self) -> str:
        return f"RetryingTask({self._inner!r}, max_attempts={self._policy.max_attempts})"
