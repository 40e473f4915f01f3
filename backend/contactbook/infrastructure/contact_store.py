"""Contact Store - SQLAlchemy implementation of core.repository_protocols.ContactStore.

Invariants:
    - create/replace rely on uq_contacts_mobile; a rejected write raises DuplicateMobileError
    - replace overwrites every mutable column and bumps updated_at; None if id is unknown
    - delete is a single conditional DELETE: True only when exactly one row went away,
      so two concurrent deletes of the same id can never both succeed
"""

from collections.abc import Mapping

from sqlalchemy import delete, select

from contactbook.core.domain_types import CONTACT_ATTRIBUTES, ContactId, EntityKind
from contactbook.core.errors import DuplicateMobileError
from contactbook.db.base import utcnow
from contactbook.infrastructure.sql_store import SqlStore
from contactbook.models.contact import Contact

MUTABLE_ATTRIBUTES = frozenset(CONTACT_ATTRIBUTES.values())


def _check_fields(fields: Mapping[str, str]) -> None:
    if set(fields) != MUTABLE_ATTRIBUTES:
        missing = sorted(MUTABLE_ATTRIBUTES - set(fields))
        unknown = sorted(set(fields) - MUTABLE_ATTRIBUTES)
        raise ValueError(
            f"Contact fields must be complete (missing={missing}, unknown={unknown})",
        )


class SqlContactStore(SqlStore):
    """Contact persistence over one AsyncSession."""

    entity = EntityKind.CONTACT

    async def list_all(self, *, timeout: float | None = None) -> list[Contact]:
        async def work():
            result = await self.db.execute(
                select(Contact).order_by(Contact.created_at, Contact.id),
            )
            return list(result.scalars().all())
        return await self._execute("list", work, timeout)

    async def find_by_id(
        self, contact_id: ContactId, *, timeout: float | None = None,
    ) -> Contact | None:
        async def work():
            return await self.db.get(Contact, contact_id)
        return await self._execute("find_by_id", work, timeout)

    async def find_by_mobile(
        self, mobile: str, *, timeout: float | None = None,
    ) -> Contact | None:
        async def work():
            result = await self.db.execute(
                select(Contact).where(Contact.mobile == mobile),
            )
            return result.scalar_one_or_none()
        return await self._execute("find_by_mobile", work, timeout)

    async def create(
        self, fields: Mapping[str, str], *, timeout: float | None = None,
    ) -> Contact:
        _check_fields(fields)

        async def work():
            contact = Contact(**fields)
            self.db.add(contact)
            await self.db.commit()
            return contact
        return await self._execute(
            "create", work, timeout,
            on_duplicate=lambda: DuplicateMobileError(fields["mobile"]),
        )

    async def replace(
        self,
        contact_id: ContactId,
        fields: Mapping[str, str],
        *,
        timeout: float | None = None,
    ) -> Contact | None:
        _check_fields(fields)

        async def work():
            contact = await self.db.get(Contact, contact_id)
            if contact is None:
                return None
            for attribute, value in fields.items():
                setattr(contact, attribute, value)
            contact.updated_at = utcnow()
            await self.db.commit()
            return contact
        return await self._execute(
            "replace", work, timeout,
            on_duplicate=lambda: DuplicateMobileError(fields["mobile"]),
        )

    async def delete(
        self, contact_id: ContactId, *, timeout: float | None = None,
    ) -> bool:
        async def work():
            result = await self.db.execute(
                delete(Contact).where(Contact.id == contact_id),
            )
            await self.db.commit()
            return result.rowcount == 1
        return await self._execute("delete", work, timeout)
