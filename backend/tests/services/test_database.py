"""Store Handle - connect/backoff, timeouts, error mapping and the startup lifespan.

Tests cover:
    - connect() creates tables; unreachable store raises StoreUnavailableError
      after the configured retries
    - bounded() turns an overrun into StoreTimeoutError
    - Driver errors inside a store call or a session become StoreUnavailableError;
      duplicates raised by a store pass through the session untouched
    - The FastAPI lifespan refuses to start without a store
"""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import DBAPIError, OperationalError

from contactbook.config import Settings
from contactbook.core.errors import (
    DuplicateMobileError, StoreTimeoutError, StoreUnavailableError,
)
from contactbook.infrastructure.contact_store import SqlContactStore
from contactbook.infrastructure.database import (
    DatabaseSessionManager, bounded, driver_message,
)
from contactbook.main import app, lifespan

UNREACHABLE_URL = "sqlite+aiosqlite:////nonexistent-dir/for-sure/contacts.db"


async def test_connect_creates_tables(db_manager):
    assert await db_manager.health_check() is True


async def test_connect_gives_up_after_retries(caplog):
    manager = DatabaseSessionManager(UNREACHABLE_URL)
    with caplog.at_level(logging.WARNING, logger="contactbook.infrastructure.database"):
        with pytest.raises(StoreUnavailableError) as info:
            await manager.connect(max_retries=2, base_delay_ms=1, max_delay_ms=5)
    assert info.value.operation == "connect"
    retries = [r for r in caplog.records if "retry after" in r.getMessage()]
    assert len(retries) == 2
    await manager.dispose()


def test_backoff_is_capped_with_jitter():
    for attempt in range(10):
        delay = DatabaseSessionManager._backoff(attempt, 500, 10_000)
        assert 0 < delay <= 12_500


async def test_bounded_times_out():
    with pytest.raises(StoreTimeoutError) as info:
        await bounded(asyncio.sleep(1), 0.01, "contact.list")
    assert info.value.operation == "contact.list"


async def test_bounded_without_timeout_just_awaits():
    async def answer():
        return 42
    assert await bounded(answer(), None, "noop") == 42


async def test_store_maps_driver_errors():
    db = AsyncMock()
    db.execute.side_effect = OperationalError(
        "SELECT 1", {}, Exception("disk I/O error"),
    )
    with pytest.raises(StoreUnavailableError) as info:
        await SqlContactStore(db).list_all()
    assert "disk I/O error" in info.value.message
    assert info.value.http_status == 500
    db.rollback.assert_awaited_once()


async def test_store_call_respects_default_timeout():
    async def slow(*args, **kwargs):
        await asyncio.sleep(1)

    db = AsyncMock()
    db.execute = slow
    with pytest.raises(StoreTimeoutError):
        await SqlContactStore(db, default_timeout=0.01).list_all()


def test_driver_message_prefers_original_exception():
    err = OperationalError("SELECT 1", {}, Exception("connection refused"))
    assert driver_message(err) == "connection refused"



async def test_session_maps_raw_driver_errors(db_manager):
    with pytest.raises(StoreUnavailableError) as info:
        async with db_manager.session():
            raise DBAPIError("INSERT", {}, Exception("value too long"))
    assert info.value.operation == "query"
    assert "value too long" in info.value.message


async def test_session_passes_store_duplicates_through(db_manager):
    fields = {
        "name": "A", "company": "C", "email": "a@x.com", "title": "T",
        "mobile": "1", "image_url": "u", "group_id": "g",
    }
    with pytest.raises(DuplicateMobileError):
        async with db_manager.session() as db:
            store = SqlContactStore(db)
            await store.create(fields)
            await store.create(dict(fields))


async def test_lifespan_refuses_to_start_without_store(monkeypatch):
    monkeypatch.setattr(
        "contactbook.main.setup_logging", lambda *args, **kwargs: None,
    )
    original = app.state.settings
    app.state.settings = Settings(
        database_url=UNREACHABLE_URL,
        store_connect_max_retries=0,
    )
    try:
        with pytest.raises(StoreUnavailableError):
            async with lifespan(app):
                pass
    finally:
        app.state.settings = original


async def test_lifespan_holds_one_manager_for_process_lifetime(monkeypatch, database_url):
    monkeypatch.setattr(
        "contactbook.main.setup_logging", lambda *args, **kwargs: None,
    )
    original = app.state.settings
    app.state.settings = Settings(database_url=database_url)
    try:
        async with lifespan(app):
            manager = app.state.db_manager
            assert isinstance(manager, DatabaseSessionManager)
            assert await manager.health_check() is True
        assert app.state.db_manager is None
    finally:
        app.state.settings = original
