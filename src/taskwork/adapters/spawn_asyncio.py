"""asyncio-based spawn adapters.

`spawn` schedules a task on the caller's event loop. `spawn_blocking` parks
a dedicated worker thread for the whole run: the thread drives its own event
loop until the task's coroutine completes, and the result (or exception) is
bridged back to the caller's loop through the returned future.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from concurrent.futures import Executor
from typing import Optional, TypeVar

from taskwork.core.interfaces.task import Task
from taskwork.core.settings import logger

T = TypeVar("T")


def spawn(task: Task[T]) -> "asyncio.Task[T]":
    """Run one `task.call()` concurrently on the running event loop."""

    async def _call() -> T:
        return await task.call()

    return asyncio.get_running_loop().create_task(_call())


def _drive_to_completion(task: Task[T]) -> T:
    # Runs inside the worker thread, which owns a fresh event loop.
    return asyncio.run(task.call())


def _worker_main(task: Task[T], result: "concurrent.futures.Future[T]") -> None:
    if not result.set_running_or_notify_cancel():
        return
    try:
        value = _drive_to_completion(task)
    except BaseException as exc:
        # delivered to whoever awaits the handle
        result.set_exception(exc)
    else:
        result.set_result(value)


def spawn_blocking(task: Task[T], executor: Optional[Executor] = None) -> "asyncio.Future[T]":
    """Run one `task.call()` on a worker thread with its own event loop.

    Without an executor every call starts its own daemon thread, so long
    running loops never queue behind each other. Passing an executor borrows
    a worker from it instead; a bounded pool then caps how many run at once.

    Args:
        task: Task to move onto the worker; the caller must not call it afterwards
        executor: Optional pool to borrow the worker from

    Returns:
        Future resolved with the task's value or its exception.
    """
    loop = asyncio.get_running_loop()
    if executor is not None:
        logger.debug(f"[spawn:blocking] offloading task={task!r} executor={executor!r}")
        return loop.run_in_executor(executor, _drive_to_completion, task)

    result: "concurrent.futures.Future[T]" = concurrent.futures.Future()
    worker = threading.Thread(
        target=_worker_main,
        args=(task, result),
        name=f"taskwork-{getattr(task, 'name', type(task).__name__)}",
        daemon=True,
    )
    logger.debug(f"[spawn:blocking] starting thread={worker.name} task={task!r}")
    worker.start()
    return asyncio.wrap_future(result, loop=loop)
