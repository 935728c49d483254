"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import get_services
from apps.api.main import app
from core.config import Settings
from domain.value_objects import FileMetadata
from services.container import CamServices, build_services


class FakeClock:
    """Manually advanced, timezone-aware clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float = 0, seconds: float = 0) -> None:
        self.now = self.now + timedelta(minutes=minutes, seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def services(clock: FakeClock) -> CamServices:
    """Fresh registry/tracker/audit wiring driven by the fake clock."""
    return build_services(Settings(), clock=clock)


@pytest.fixture
def registry(services):
    return services.registry


@pytest.fixture
def tracker(services):
    return services.tracker


@pytest.fixture
def audit(services):
    return services.audit


@pytest.fixture
def cam_file() -> FileMetadata:
    return FileMetadata(original_name="cam-q1.pdf", size_bytes=2048, content_type="application/pdf")


@pytest.fixture
def test_client(services: CamServices) -> TestClient:
    """FastAPI test client bound to the per-test service container."""
    app.dependency_overrides[get_services] = lambda: services
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}
