from contextlib import asynccontextmanager
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from bubble_rsvp.config.settings import Settings
from bubble_rsvp.main import app
from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.layout import RsvpConfig
from bubble_rsvp.rsvps.locking import WriteLock
from bubble_rsvp.rsvps.tests.inmemory_stores import InMemoryWorkbook

FIXED_NOW = datetime(2025, 4, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def rsvp_config() -> RsvpConfig:
    return RsvpConfig.from_settings(Settings(_env_file=None))


@pytest.fixture
def workbook(rsvp_config):
    """Empty in-memory workbook with headers and captions written."""
    workbook = InMemoryWorkbook(rsvp_config)
    workbook.ensure_layout()
    return workbook


@pytest.fixture
def write_lock() -> WriteLock:
    return WriteLock(timeout_seconds=0.1)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def client_factory(workbook):
    """Build a test client with FastAPI dependency overrides applied.

    The workbook dependency defaults to the in-memory `workbook` fixture.
    """

    @asynccontextmanager
    async def factory(overrides=None):
        app.dependency_overrides[get_workbook] = lambda: workbook
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest_asyncio.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac
