import importlib
import logging
import sys

import pytest
from pydantic import ValidationError

from taskwork.adapters.logging_adapter import LoggingAdapter, coerce_level
from taskwork.core import settings as settings_module
from taskwork.core.interfaces.logging import LoggingPort
from taskwork.core.logging_config import configure_logging
from taskwork.core.settings import get_settings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.parametrize(
    "value,expected",
    [(None, logging.INFO), ("debug", logging.DEBUG), (" warning ", logging.WARNING), (40, 40), ("nonsense", logging.INFO)],
)
def test_coerce_level(value, expected):
    assert coerce_level(value) == expected


def test_configure_logging_splits_stdout_and_stderr(restore_root_logger):
    configure_logging("DEBUG")

    handlers = restore_root_logger.handlers
    levels = sorted(h.level for h in handlers)
    assert levels == [logging.DEBUG, logging.WARNING]
    assert {h.stream for h in handlers} == {sys.stdout, sys.stderr}
    assert restore_root_logger.level == logging.DEBUG


def test_configure_logging_is_repeatable(restore_root_logger, fresh_settings):
    configure_logging()
    configure_logging()
    assert len(restore_root_logger.handlers) == 2


def test_configure_logging_reads_level_from_environment(restore_root_logger, fresh_settings, monkeypatch):
    monkeypatch.setenv("TASKWORK_LOG_LEVEL", "error")

    configure_logging()

    assert restore_root_logger.level == logging.ERROR


def test_adapter_emits_through_named_logger(caplog):
    adapter = LoggingAdapter(name="taskwork.test", log_level="info")

    with caplog.at_level(logging.INFO, logger="taskwork.test"):
        adapter.info("hello %s", "world")
        adapter.debug("hidden")

    messages = [r.getMessage() for r in caplog.records if r.name == "taskwork.test"]
    assert messages == ["hello world"]


def test_adapter_without_level_defers_to_parents():
    adapter = LoggingAdapter(name="taskwork.inherit")

    assert adapter.logger.level == logging.NOTSET
    assert isinstance(adapter, LoggingPort)


class TestLazySettings:
    def test_import_survives_invalid_environment(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("TASKWORK_RETRY_ATTEMPTS", "0")

        module = importlib.reload(settings_module)
        try:
            with pytest.raises(ValidationError):
                module.get_settings()
        finally:
            module.get_settings.cache_clear()

    def test_settings_cached_until_cleared(self, monkeypatch, fresh_settings):
        first = get_settings()
        monkeypatch.setenv("TASKWORK_RETRY_ATTEMPTS", "7")

        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().TASKWORK_RETRY_ATTEMPTS == 7
