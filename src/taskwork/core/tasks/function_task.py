from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class FunctionTask(Generic[T]):
    """Adapts a zero-argument async function into a `Task`.

    The function is invoked again on every `call`, so each call awaits a
    brand new attempt rather than an already consumed coroutine.
    """

    def __init__(self, func: Callable[[], Awaitable[T]], name: Optional[str] = None) -> None:
        if not callable(func):
            raise TypeError(f"FunctionTask expects a callable, got {type(func).__name__}")
        self._func = func
        self.name = name or getattr(func, "__qualname__", None) or repr(func)

    async def call(self) -> T:
        return await self._func()

    def __repr__(self) -> str:
        return f"FunctionTask({self.name})"
