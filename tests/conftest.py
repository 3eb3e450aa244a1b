"""Shared fixtures: a throwaway SQLite database and a predictable clock."""

import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from scoreboard.app import create_app
from scoreboard.core import build_engine, create_tables
from scoreboard.services import RankingEngine, ScoreStore, parse_submission

ADMIN_KEY = "test-admin-key"


class StepClock:
    """Clock that moves forward one second every time it is read."""

    def __init__(self, start=datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            now = self.current
            self.current += timedelta(seconds=1)
            return now


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'scores.db'}")
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(engine, clock):
    return ScoreStore(engine, clock=clock)


@pytest.fixture
def ranking(store):
    return RankingEngine(store)


@pytest.fixture
def submit(store):
    """Submit a score through the same defaulting step the API uses."""

    def _submit(registration_number, final_score, **fields):
        body = {"registrationNumber": registration_number, "finalScore": final_score, **fields}
        return store.submit(parse_submission(body))

    return _submit


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setenv("ADMIN_KEY", ADMIN_KEY)
    app = create_app(store)
    with TestClient(app) as test_client:
        yield test_client
