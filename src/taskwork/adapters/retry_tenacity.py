from __future__ import annotations

import random
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
)

from taskwork.core.exceptions import InternalContractViolation
from taskwork.core.interfaces.logging import LoggingPort
from taskwork.core.settings import logger as default_logger

if TYPE_CHECKING:
    from taskwork.core.config import RetryPolicy

T = TypeVar("T")


class TenacityRetryAdapter:
    """Tenacity-based retry adapter implementing RetryPort.

    Stops after `policy.max_attempts`, resolves `policy.sleep` afresh before
    every wait and re-raises the last error unchanged. Tenacity checks the
    stop condition before waiting, so there is no wait after the final
    attempt and none after a success.
    """

    def __init__(
        self,
        policy: "RetryPolicy",
        logger: LoggingPort = default_logger,
        label: str = "task",
        rng: Optional[random.Random] = None,
    ) -> None:
        self.policy = policy
        self.label = label
        self._logger = logger
        self._rng = rng

    def _wait(self, retry_state: RetryCallState) -> float:
        return self.policy.sleep.resolve(self._rng)

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        max_attempts = self.policy.max_attempts
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=self._wait,
            # a broken invariant is never another attempt, whatever retry_on says
            retry=(
                retry_if_exception_type(self.policy.retry_on)
                & retry_if_not_exception_type(InternalContractViolation)
            ),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                try:
                    return await func()
                except InternalContractViolation:
                    raise
                except self.policy.retry_on as exc:
                    number = attempt.retry_state.attempt_number
                    if number >= max_attempts:
                        self._logger.error(
                            f"[retry:exhausted] label={self.label} attempts={number} error={exc!r}"
                        )
                    else:
                        self._logger.warning(
                            f"[retry:failed] label={self.label} attempt={number}/{max_attempts} error={exc!r}"
                        )
                    raise
        raise InternalContractViolation(
            f"retry loop for {self.label} ended without a result or a recorded error"
        )
