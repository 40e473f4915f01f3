"""Database Session Manager - async connection pool, startup connect, health checks.

Invariants:
    - One manager per process: created in the FastAPI lifespan, kept on app.state,
      disposed at shutdown, never re-created per request
    - connect() retries with exponential backoff; failure after the last attempt
      raises StoreUnavailableError and the process refuses to serve
    - Every session auto-rolls-back on exception (no partial commits leak)
    - SQLAlchemy driver exceptions escaping a session are mapped to StoreUnavailableError;
      unique-index rejections never get this far (SqlStore maps them to duplicates)

Design Decisions:
    - Tables and unique indexes created from ORM metadata in connect(): the unique
      indexes are the authoritative uniqueness guard, so they must exist before
      the first request
    - expire_on_commit=False: handlers read entity attributes after commit
    - Retry lives at connection-establishment time only; per-request calls never retry
"""

import asyncio
import logging
import random
from collections.abc import Awaitable
from contextlib import asynccontextmanager
from typing import AsyncGenerator, TypeVar

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import OperationalError, DBAPIError, SQLAlchemyError
from sqlalchemy import text

from contactbook.core.errors import StoreTimeoutError, StoreUnavailableError
from contactbook.db.base import Base
import contactbook.models  # noqa: F401  (populate Base.metadata)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def driver_message(error: BaseException) -> str:
    """Underlying driver text of a SQLAlchemy error, without the SQL echo."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


async def bounded(
    awaitable: Awaitable[T], timeout: float | None, operation: str,
) -> T:
    """Await with an optional time budget; overrun raises StoreTimeoutError."""
    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError:
        logger.error(
            f"Store call timed out after {timeout}s",
            extra={"operation": operation},
        )
        raise StoreTimeoutError(operation, timeout)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def connect(
        self,
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
    ) -> None:
        """Reach the store and ensure tables + unique indexes exist."""
        for attempt in range(max_retries + 1):
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                logger.info(
                    "Database connected", extra={"attempt": attempt + 1},
                )
                return
            except (OSError, SQLAlchemyError) as e:
                if attempt >= max_retries:
                    logger.critical(
                        f"Database unreachable after {attempt + 1} attempts: {e}",
                    )
                    raise StoreUnavailableError(
                        driver_message(e), "connect",
                    ) from e
                delay = self._backoff(attempt, base_delay_ms, max_delay_ms)
                logger.warning(
                    f"Database connect failed, retry after {delay}ms: {e}",
                    extra={"attempt": attempt + 1},
                )
                await asyncio.sleep(delay / 1000)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StoreUnavailableError(driver_message(e), "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StoreUnavailableError(driver_message(e), "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StoreUnavailableError(driver_message(e), "unknown") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()

    @staticmethod
    def _backoff(attempt: int, base_delay_ms: int, max_delay_ms: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(max_delay_ms, (2 ** attempt) * base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    return DatabaseSessionManager(database_url, **kwargs)
