"""
Test configuration and fixtures for DevPalette tests.
"""
import os

# Keep tests off the on-disk default backend
os.environ.setdefault("DEVPALETTE_STORAGE_BACKEND", "memory")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from devpalette.api.v1 import get_workspace
from devpalette.services.persistence import InMemoryBackend
from devpalette.services.workspace import Workspace

# Import the main app
from main import app

BASE_TIME = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class TickingClock:
    """Clock that advances one millisecond per reading."""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        reading = self.now
        self.now = self.now + timedelta(milliseconds=1)
        return reading


class FrozenClock:
    """Clock that always returns the same reading."""

    def __init__(self, at: datetime = BASE_TIME):
        self.at = at

    def __call__(self) -> datetime:
        return self.at


class RecordingBackend(InMemoryBackend):
    """In-memory backend that counts writes."""

    def __init__(self):
        super().__init__()
        self.writes = []

    def write(self, key, value):
        self.writes.append(key)
        return super().write(key, value)


class FailingBackend(InMemoryBackend):
    """Backend whose writes always fail."""

    def write(self, key, value):
        return False


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def workspace(backend, clock):
    """Fresh workspace over an in-memory backend."""
    return Workspace(backend, clock=clock)


@pytest.fixture
def test_client(workspace):
    """Create test client for the FastAPI app bound to a fresh workspace."""
    app.dependency_overrides[get_workspace] = lambda: workspace
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from devpalette.utils.metrics import reset_metrics
    reset_metrics()
