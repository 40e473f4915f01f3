"""Service test fixtures - file-backed SQLite store + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path (tables + unique indexes
      created by DatabaseSessionManager.connect, the same path production uses)
    - The client fixture swaps app.state.db_manager/settings and restores them

Design Decisions:
    - File DB over :memory:: each AsyncSession gets its own connection, so
      commits and rollbacks behave like a real server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from contactbook.config import Settings
from contactbook.infrastructure.database import DatabaseSessionManager
from contactbook.main import app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'contacts.db'}"


@pytest.fixture
async def db_manager(database_url):
    manager = DatabaseSessionManager(database_url)
    await manager.connect(max_retries=0)
    yield manager
    await manager.dispose()


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(
        database_url=database_url,
        store_timeout_seconds=5.0,
        duplicate_status_code=200,
        enforce_group_reference=False,
        expose_internal_errors=True,
    )


@pytest.fixture
async def client(db_manager, settings):
    """FastAPI test client bound to the per-test store."""
    original_settings = app.state.settings
    original_manager = getattr(app.state, "db_manager", None)
    app.state.settings = settings
    app.state.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.settings = original_settings
    app.state.db_manager = original_manager
