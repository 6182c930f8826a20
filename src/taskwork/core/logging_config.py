"""Central logging configuration utilities.

Library code never mutates global logging; it only emits through
`LoggingPort` (see `taskwork.core.settings.logger`). An application that
wants the default sinks calls `configure_logging` once from its entry point:
DEBUG/INFO records go to stdout, WARNING and above go to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from taskwork.adapters.logging_adapter import coerce_level
from taskwork.core.settings import get_settings

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover
        return record.levelno <= self.max_level


class _MinLevelFilter(logging.Filter):
    def __init__(self, min_level: int):
        super().__init__()
        self.min_level = min_level

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover
        return record.levelno >= self.min_level


def configure_logging(
    level: int | str | None = None,
    fmt: Optional[str] = None,
) -> None:
    """Configure root logger with separate stdout/stderr sinks.

    Existing root handlers are removed first so repeated calls do not
    duplicate output. Without an explicit `level`, TASKWORK_LOG_LEVEL is used.
    """
    if level is None:
        level = get_settings().TASKWORK_LOG_LEVEL
    numeric_level = coerce_level(level)
    fmt = fmt or DEFAULT_FORMAT

    root = logging.getLogger()
    root.setLevel(numeric_level)

    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(fmt)

    # stdout handler for DEBUG/INFO
    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(logging.INFO))
    stdout_handler.setFormatter(formatter)

    # stderr handler for WARNING+
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.addFilter(_MinLevelFilter(logging.WARNING))
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)

    logging.getLogger("taskwork").debug("Logging configured level=%s", numeric_level)
