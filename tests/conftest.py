"""Shared fixtures for the Todo Service test suite."""

import pytest

from todo_api.config.settings import get_settings
from todo_api.metrics.sink import MetricsSink
from todo_api.store.base import InMemoryTodoStore
from todo_api.todos.dispatcher import TodoDispatcher


@pytest.fixture(autouse=True)
def base_env(monkeypatch):
    """Every test runs with the required table name configured."""
    monkeypatch.setenv("TODOS_TABLE", "test-todos-table")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(STORE_BACKEND="memory", METRICS_BACKEND="none")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()


class RecordingMetricsSink(MetricsSink):
    """Keeps emitted counters in memory; optionally fails every emit."""

    def __init__(self, fail: bool = False):
        self.emitted: list[tuple[str, float]] = []
        self.fail = fail

    async def emit_count(self, name: str, value: float) -> None:
        if self.fail:
            raise RuntimeError("CloudWatch unavailable")
        self.emitted.append((name, value))


class TickingClock:
    """Returns a strictly later timestamp on every call."""

    def __init__(self):
        self.ticks = 0

    def __call__(self) -> str:
        self.ticks += 1
        return f"2024-01-01T00:00:{self.ticks:02d}.000Z"


SAMPLE_TODO = {
    "todoId": "todo-1",
    "title": "Buy milk",
    "description": "2 liters",
    "completed": False,
    "createdAt": "2023-12-31T10:00:00.000Z",
    "updatedAt": "2023-12-31T10:00:00.000Z",
}


@pytest.fixture
def store() -> InMemoryTodoStore:
    return InMemoryTodoStore()


@pytest.fixture
def seeded_store() -> InMemoryTodoStore:
    return InMemoryTodoStore([SAMPLE_TODO])


@pytest.fixture
def metrics() -> RecordingMetricsSink:
    return RecordingMetricsSink()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def dispatcher(store, metrics, clock) -> TodoDispatcher:
    return TodoDispatcher(store=store, metrics=metrics, clock=clock)


@pytest.fixture
def seeded_dispatcher(seeded_store, metrics, clock) -> TodoDispatcher:
    return TodoDispatcher(store=seeded_store, metrics=metrics, clock=clock)
