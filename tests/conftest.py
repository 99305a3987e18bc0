# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - clock            → deterministic clock, advances 1 ms per call
# - sink             → RecordingSink capturing every log event
# - stores           → fresh StoreSet driven by `clock`
# - pipeline         → IngestAndRoute over `stores` and `sink`
# - app_config       → AppConfig pointing at a tmp snapshot dir
#
# ==============================================

from datetime import datetime, timedelta, timezone

import pytest

from polystore.config import AppConfig, LogConfig, PersistenceConfig
from polystore.ingest_and_route import IngestAndRoute
from polystore.storage.store_set import StoreSet


class TickingClock:
    """Returns a strictly increasing UTC datetime on every call."""

    def __init__(self, start=None, step=timedelta(milliseconds=1)):
        self.current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.step = step
        self.calls = 0

    def __call__(self):
        self.calls += 1
        self.current = self.current + self.step
        return self.current


class RecordingSink:
    """Keeps (level, message) tuples instead of printing."""

    def __init__(self):
        self.events = []

    def info(self, message):
        self.events.append(("info", message))

    def success(self, message):
        self.events.append(("success", message))

    def warn(self, message):
        self.events.append(("warn", message))

    def error(self, message, error=None):
        self.events.append(("error", message))

    def route(self, data_type, store, reason):
        self.events.append(("route", (data_type, store, reason)))

    def of_level(self, level):
        return [payload for lvl, payload in self.events if lvl == level]


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def stores(clock):
    return StoreSet(clock=clock)


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        persistence=PersistenceConfig(snapshot_dir=str(tmp_path / "snapshots")),
        log=LogConfig(enabled=False),
    )


@pytest.fixture
def pipeline(app_config, stores, sink):
    """Create a fresh, non-persistent pipeline instance."""
    return IngestAndRoute(config=app_config, stores=stores, sink=sink)
