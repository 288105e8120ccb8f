"""Shared fixtures for gh_activity tests."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from gh_activity.cache.storage.memory import MemoryStorage
from gh_activity.cache.store import CacheStore
from gh_activity.client.api import GitHubClient
from gh_activity.client.retry import RetryPolicy
from gh_activity.config import ApiConfig
from gh_activity.models.events import EventRecord

BASE_URL = "https://api.github.test"


def make_event(
    event_type: str = "PushEvent",
    created_at: str | None = "2024-03-15T10:30:00Z",
    repo: str = "octocat/hello-world",
    **extra,
) -> EventRecord:
    data = {"type": event_type, "repo": {"name": repo}, "payload": extra.pop("payload", {})}
    if created_at is not None:
        data["created_at"] = created_at
    data.update(extra)
    return EventRecord.model_validate(data)


def event_json(index: int, event_type: str = "PushEvent") -> dict:
    return {
        "id": str(index),
        "type": event_type,
        "repo": {"id": index, "name": f"octocat/repo-{index}"},
        "payload": {"commits": [{"message": "fix"}]},
        "created_at": f"2024-03-{index + 1:02d}T12:00:00Z",
    }


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def cache_store(memory_storage, clock):
    return CacheStore(memory_storage, clock=clock)


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def make_client(sleep) -> Callable[..., GitHubClient]:
    """Build a GitHubClient whose requests are answered by handler."""

    def _make(handler, max_attempts: int = 3, **config) -> GitHubClient:
        return GitHubClient(
            ApiConfig(base_url=BASE_URL, **config),
            RetryPolicy(max_attempts=max_attempts, delay_ms=5000, sleep=sleep),
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture(name="make_event")
def make_event_fixture():
    return make_event


@pytest.fixture(name="event_json")
def event_json_fixture():
    return event_json


@pytest.fixture
def base_url():
    return BASE_URL
