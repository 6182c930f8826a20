from typing import Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Task(Protocol[T_co]):
    """A repeatable, possibly stateful asynchronous unit of work.

    Each `call` runs the work once. A failure is signalled by raising; the
    same instance may be called again afterwards (that is what retry relies
    on). Decorators such as `RetryingTask` take ownership of the task they
    wrap and become its only caller.
    """

    async def call(self) -> T_co:  # pragma: no cover - protocol
        ...
