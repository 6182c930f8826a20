"""SuccessTrackingLatch: a one-way liveness flag shared by all of its clones.

Typical use is a long running worker loop. The loop keeps going while the
latch is alive; the first failure kills the latch, and any holder can kill it
from the outside with `abort()`. Every clone reads and writes the same flag,
so aborting from the caller stops a loop spawned onto another thread.

Clones do nothing when garbage collected. Cleanup is explicit: call
`abort()`, or use the latch as a context manager (`with` / `async with`),
which aborts on exit.
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from typing import Awaitable, Optional, TypeVar

from taskwork.adapters.spawn_asyncio import spawn_blocking
from taskwork.core.exceptions import AlreadyDead, InternalContractViolation
from taskwork.core.interfaces.logging import LoggingPort
from taskwork.core.interfaces.task import Task
from taskwork.core.settings import logger as default_logger
from taskwork.core.tasks.function_task import FunctionTask

T = TypeVar("T")


class _LivenessFlag:
    """Thread-safe monotonic flag: alive until killed, never revived."""

    def __init__(self) -> None:
        self._dead = threading.Event()
        self._lock = threading.Lock()
        self.reason: Optional[str] = None

    def is_alive(self) -> bool:
        return not self._dead.is_set()

    def kill(self, reason: str) -> bool:
        """Mark dead; returns True only for the call that made the transition."""
        with self._lock:
            if self._dead.is_set():
                return False
            self.reason = reason
            self._dead.set()
            return True


class SuccessTrackingLatch:
    def __init__(
        self,
        name: str = "latch",
        logger: LoggingPort = default_logger,
        _flag: Optional[_LivenessFlag] = None,
    ) -> None:
        self.name = name
        self._logger = logger
        self._flag = _flag if _flag is not None else _LivenessFlag()

    def clone(self) -> "SuccessTrackingLatch":
        """Return a new handle sharing this latch's liveness flag."""
        return SuccessTrackingLatch(name=self.name, logger=self._logger, _flag=self._flag)

    __copy__ = clone

    def is_alive(self) -> bool:
        return self._flag.is_alive()

    def _kill(self, reason: str) -> None:
        if self._flag.kill(reason):
            self._logger.warning(f"[latch:dead] name={self.name} reason={reason}")

    def _broken(self, exc: InternalContractViolation) -> None:
        if self._flag.kill(f"broken: {exc!r}"):
            self._logger.error(f"[latch:broken] name={self.name} error={exc!r}")

    def abort(self) -> None:
        """Force the latch dead. Idempotent."""
        self._kill("aborted")

    def _ensure_alive(self) -> None:
        if not self.is_alive():
            raise AlreadyDead(self._flag.reason)

    async def run(self, operation: Awaitable[T]) -> T:
        """Await a single operation guarded by the latch.

        Raises AlreadyDead without awaiting `operation` if the latch is dead.
        A failing operation kills the latch before its error propagates.
        """
        if not self.is_alive():
            if inspect.iscoroutine(operation):
                operation.close()
            self._ensure_alive()
        try:
            return await operation
        except InternalContractViolation as exc:
            self._broken(exc)
            raise
        except Exception as exc:
            self._kill(f"failed: {exc!r}")
            raise

    async def run_while_alive(self, task: Task[object]) -> None:
        """Call `task` repeatedly until it fails or the latch is aborted.

        Returns None when another holder aborted the latch; raises the task's
        error when the task itself failed (the latch is dead either way).
        An in-flight call always finishes before the abort is observed.
        """
        self._ensure_alive()
        while self.is_alive():
            try:
                await task.call()
            except InternalContractViolation as exc:
                self._broken(exc)
                raise
            except Exception as exc:
                self._kill(f"failed: {exc!r}")
                raise
            # iteration boundary: let other coroutines (and aborts) in
            await asyncio.sleep(0)
        self._logger.debug(f"[latch:stopped] name={self.name} reason={self._flag.reason}")

    def spawn_while_alive(self, task: Task[object]) -> "asyncio.Future[None]":
        """Run `run_while_alive(task)` on a worker thread.

        The worker holds a clone, so `abort()` on this handle stops it.
        """
        self._ensure_alive()
        worker_latch = self.clone()
        return spawn_blocking(
            FunctionTask(lambda: worker_latch.run_while_alive(task), name=f"{self.name}:loop")
        )

    def __enter__(self) -> "SuccessTrackingLatch":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.abort()

    async def __aenter__(self) -> "SuccessTrackingLatch":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.abort()

    def __repr__(self) -> str:
        state = "alive" if self.is_alive() else "dead"
        return f"SuccessTrackingLatch(name={self.name!r}, {state})"
