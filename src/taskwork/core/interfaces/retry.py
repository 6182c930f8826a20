from typing import Protocol, Awaitable, Callable, TypeVar

T = TypeVar("T")

class RetryPort(Protocol):
    """Abstract retry interface for async operations.

    Implementations run one full retry loop per `execute` call, waiting
    between attempts. The contract keeps the tasks decoupled from a specific
    library (tenacity/backoff).
    """
    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:  # pragma: no cover - protocol
        """Execute an async callable with retry semantics.

        Args:
            func: Zero-argument callable returning a fresh awaitable per attempt.
        Returns:
            Result of the first successful invocation.
        Raises:
            Propagates last exception after exhausting attempts.
        """
        ...
