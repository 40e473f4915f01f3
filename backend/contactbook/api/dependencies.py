"""FastAPI Dependencies - wire the per-process store handle into per-request services.

Invariants:
    - The DatabaseSessionManager lives on app.state (set by the lifespan); requests
      borrow one AsyncSession each and never create a manager
    - Settings live on app.state so tests can swap them per app
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.config import Settings
from contactbook.infrastructure.contact_store import SqlContactStore
from contactbook.infrastructure.group_store import SqlGroupStore
from contactbook.services.contact_service import ContactService
from contactbook.services.group_service import GroupService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db_manager = getattr(request.app.state, "db_manager", None)
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session


def get_group_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> GroupService:
    return GroupService(SqlGroupStore(db, settings.store_timeout_seconds))


def get_contact_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ContactService:
    timeout = settings.store_timeout_seconds
    return ContactService(
        SqlContactStore(db, timeout),
        SqlGroupStore(db, timeout),
        enforce_group_reference=settings.enforce_group_reference,
    )
