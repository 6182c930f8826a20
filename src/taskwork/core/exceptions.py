from typing import Optional


class TaskworkError(Exception):
    """Base exception for errors raised by the task framework itself.

    Domain errors raised by a wrapped task never derive from this class; they
    propagate through retry and latch layers unchanged.

    Attributes:
        message: Human-readable error description
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AlreadyDead(TaskworkError):
    """Raised when work is attempted through a latch that has already died.

    Attributes:
        reason: Optional description of what killed the latch
    """
    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        message = "calling run on a latch that has already ended"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InternalContractViolation(TaskworkError):
    """Raised when an internal invariant is broken.

    Signals a bug, not a runtime failure: retry loops never retry it and the
    latch does not record it as an operation failure. It always propagates.
    """
    pass
