"""Pytest fixtures for Anymail Codes tests.

Provides reusable test fixtures for:
- Settings built without reading a .env file
- An in-memory code store driven by a fake clock
- A lookup API test client wired to that store

Usage:
    def test_lookup(client, auth_headers):
        response = client.get("/", headers=auth_headers)
        assert response.status_code == 200
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the package importable without installation
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from anymail_codes.config import Settings
from anymail_codes.infrastructure.kv.memory_code_store import MemoryCodeStore
from anymail_codes.main import create_app


TEST_ACCESS_KEY = "test-access-key"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_settings(**overrides) -> Settings:
    values = {
        "ACCESS_KEY": TEST_ACCESS_KEY,
        "CODE_TTL_SECONDS": None,
        "DOMAINS": None,
        "CODE_STORE_BACKEND": "memory",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return build_settings(CODE_TTL_SECONDS="120", DOMAINS="test.com, Example.ORG")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock) -> MemoryCodeStore:
    return MemoryCodeStore(clock=clock)


@pytest.fixture
def client(settings, memory_store) -> TestClient:
    """Lookup API client backed by the in-memory store."""
    return TestClient(create_app(settings, memory_store))


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {TEST_ACCESS_KEY}"}


@pytest.fixture
def make_settings():
    """Factory for settings with per-test overrides."""
    return build_settings
