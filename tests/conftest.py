import pytest


class CountingTask:
    """Task failing until call number `succeed_on` (never when None)."""

    def __init__(self, succeed_on=None, error_type=RuntimeError):
        self.calls = 0
        self.succeed_on = succeed_on
        self.error_type = error_type

    async def call(self):
        self.calls += 1
        if self.succeed_on is None or self.calls < self.succeed_on:
            raise self.error_type(f"call {self.calls} failed")
        return self.calls


@pytest.fixture
def counting_task_factory():
    return CountingTask
