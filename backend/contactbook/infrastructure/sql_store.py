"""SQL Store Base - time budget and driver-error mapping shared by the entity stores.

Invariants:
    - Every public store call runs through _execute (timeout + error mapping)
    - IntegrityError is a unique-index rejection: mapped to the caller's DuplicateKeyError
    - Any other SQLAlchemyError becomes StoreUnavailableError carrying the driver text
    - The session is rolled back before an error leaves the store
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.core.domain_types import EntityKind
from contactbook.core.errors import DuplicateKeyError, StoreUnavailableError
from contactbook.infrastructure.database import bounded, driver_message

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlStore:
    """Base for SQLAlchemy-backed stores bound to one request session."""

    entity: EntityKind

    def __init__(self, db: AsyncSession, default_timeout: float | None = None):
        self.db = db
        self.default_timeout = default_timeout

    async def _execute(
        self,
        operation: str,
        work: Callable[[], Awaitable[T]],
        timeout: float | None,
        on_duplicate: Callable[[], DuplicateKeyError] | None = None,
    ) -> T:
        qualified = f"{self.entity.value.lower()}.{operation}"
        budget = timeout if timeout is not None else self.default_timeout
        try:
            return await bounded(work(), budget, qualified)
        except IntegrityError as e:
            await self.db.rollback()
            if on_duplicate is None:
                logger.error(
                    f"Unexpected integrity error: {e}",
                    extra={"operation": qualified},
                )
                raise StoreUnavailableError(driver_message(e), qualified) from e
            logger.info(
                "Unique index rejected write", extra={"operation": qualified},
            )
            raise on_duplicate() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Store operation failed: {e}", extra={"operation": qualified},
            )
            raise StoreUnavailableError(driver_message(e), qualified) from e
