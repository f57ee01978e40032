"""Test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from healthprobe.config import Config
from healthprobe.dependencies.config import config_dependency
from healthprobe.main import create_app

from .support.config import ENVIRONMENT_VARIABLES
from .support.sampler import MockSampler


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear the configuration environment and shorten the CPU window."""
    for variable in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv("CPU_TIMESPAN_MS", "20")
    monkeypatch.setenv("HEALTHPROBE_LOG_PROFILE", "development")


@pytest.fixture
def config() -> Config:
    """Load and return the test configuration from the environment."""
    return config_dependency.reload()


@pytest.fixture
def sampler() -> MockSampler:
    """Return a sampler with injected readings."""
    return MockSampler()


@pytest_asyncio.fixture
async def app(config: Config, sampler: MockSampler) -> AsyncIterator[FastAPI]:
    """Return a configured test application.

    Wraps the application in a lifespan manager so that startup and shutdown
    events are sent during test execution.
    """
    app = create_app(sampler=sampler)
    async with LifespanManager(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Return an ``httpx.AsyncClient`` configured to talk to the test app."""
    async with AsyncClient(
        base_url="https://example.com/", transport=ASGITransport(app=app)
    ) as client:
        yield client
