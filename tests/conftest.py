"""Shared fixtures: fake clock, fresh stores and app clients per test."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from patterns.domain_config import TaskTrackerConfig
from verticals.tasks.repository import TaskStore
from verticals.tasks.seed import demo_tasks


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock) -> TaskStore:
    """Store holding the three demo tasks (ids 1-3)."""
    return TaskStore(demo_tasks(), clock=clock)


@pytest.fixture()
def empty_store(clock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def config() -> TaskTrackerConfig:
    return TaskTrackerConfig(serve_web_client=False)


@pytest.fixture()
def app(config, store):
    return create_app(config, store)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
