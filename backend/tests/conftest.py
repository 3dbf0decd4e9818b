"""
NoteKeeper Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own note file under pytest's tmp_path, a
       deterministic clock, and (for HTTP tests) an app built by
       create_app() with the fault injector switched off.

Fixture Hierarchy (all function-scoped):
    ├── storage_path:  Path of a not-yet-existing notes.json in tmp_path
    ├── clock:         FakeClock, advances one second per reading
    ├── repository:    NoteRepository over storage_path + clock
    ├── app_settings:  Settings pointing at storage_path, failure rate 0
    ├── app:           FastAPI app from create_app()
    └── test_client:   HTTPX AsyncClient with the app's lifespan entered
"""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the module-level app created on import away from ./data
os.environ.setdefault("NOTES_STORAGE_PATH", os.path.join(tempfile.mkdtemp(prefix="notekeeper_test_"), "notes.json"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from notekeeper.config import Settings  # noqa: E402
from notekeeper.main import create_app  # noqa: E402
from notekeeper.repository import NoteRepository  # noqa: E402
from notekeeper.services.note_service import FaultInjector  # noqa: E402


class FakeClock:
    """Epoch-millisecond clock that moves forward a fixed step on every call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1_000):
        self.current = start
        self.step = step

    def __call__(self) -> int:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "data" / "notes.json"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository(storage_path, clock):
    return NoteRepository(str(storage_path), clock=clock)


@pytest.fixture
def app_settings(storage_path):
    return Settings(
        notes_storage_path=str(storage_path),
        update_failure_rate=0.0,
        log_level="WARNING",
    )


@pytest.fixture
def app(app_settings, repository):
    return create_app(
        app_settings=app_settings,
        repository=repository,
        fault_injector=FaultInjector(0.0),
    )


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not send lifespan events, so the lifespan is entered
    explicitly; that is what loads the note file.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
