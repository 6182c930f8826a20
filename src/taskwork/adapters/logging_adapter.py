import logging
from typing import Optional


def coerce_level(level: int | str | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    key = str(level).upper().strip()
    # Python 3.11 mapping helper
    mapping_getter = getattr(logging, "getLevelNamesMapping", None)
    if callable(mapping_getter):
        mapping = mapping_getter()
        if isinstance(mapping, dict) and key in mapping:
            return mapping[key]
    return logging._nameToLevel.get(key, logging.INFO)


class LoggingAdapter:
    """Stdlib implementation of LoggingPort.

    Delegates to Python's logging. It does NOT add its own handlers so that
    `configure_logging` (or the host application) controls sinks. Without an
    explicit `log_level` the logger keeps NOTSET and follows its parents.
    """

    def __init__(self, name: str = "taskwork", log_level: Optional[int | str] = None):
        self.logger = logging.getLogger(name)
        if log_level is not None:
            self.logger.setLevel(coerce_level(log_level))
        # Allow messages to bubble to root handlers (separate sinks)
        self.logger.propagate = True

    def info(self, msg: str, *args):
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args):
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args):
        self.logger.error(msg, *args)

    def debug(self, msg: str, *args):
        self.logger.debug(msg, *args)
