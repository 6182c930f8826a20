from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggingPort(Protocol):
    """Diagnostic sink used by retry loops, latches and spawn adapters.

    Messages are plain strings with optional %-style arguments. Emitting must
    never raise into the caller; sinks and levels are configured by the host
    application, not by the port.
    """

    def debug(self, msg: str, *args) -> None:  # pragma: no cover - protocol
        ...

    def info(self, msg: str, *args) -> None:  # pragma: no cover - protocol
        ...

    def warning(self, msg: str, *args) -> None:  # pragma: no cover - protocol
        ...

    def error(self, msg: str, *args) -> None:  # pragma: no cover - protocol
        ...
