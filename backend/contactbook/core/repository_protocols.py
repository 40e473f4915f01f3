"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every store call takes an optional timeout (seconds); None means the store default
    - Stores return None/False for "not found"; services turn that into ResourceNotFoundError
    - Stores raise DuplicateKeyError when their unique index rejects a write

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - GroupLike/ContactLike instead of ORM classes: handlers never depend on SQLAlchemy
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Protocol, Sequence

from contactbook.core.domain_types import ContactId, GroupId


class GroupLike(Protocol):
    """Structural contract for persisted Group objects."""
    id: GroupId
    name: str
    created_at: datetime
    updated_at: datetime


class ContactLike(Protocol):
    """Structural contract for persisted Contact objects."""
    id: ContactId
    name: str
    company: str
    email: str
    title: str
    mobile: str
    image_url: str
    group_id: str
    created_at: datetime
    updated_at: datetime


class GroupStore(Protocol):
    """Contract for group persistence. Unique index on name."""
    async def list_all(
        self, *, timeout: float | None = None,
    ) -> Sequence[GroupLike]: ...
    async def find_by_id(
        self, group_id: GroupId, *, timeout: float | None = None,
    ) -> GroupLike | None: ...
    async def find_by_name(
        self, name: str, *, timeout: float | None = None,
    ) -> GroupLike | None: ...
    async def create(
        self, name: str, *, timeout: float | None = None,
    ) -> GroupLike: ...


class ContactStore(Protocol):
    """Contract for contact persistence. Unique index on mobile.

    `fields` maps ORM attribute names (see domain_types.CONTACT_ATTRIBUTES)
    to values.
    """
    async def list_all(
        self, *, timeout: float | None = None,
    ) -> Sequence[ContactLike]: ...
    async def find_by_id(
        self, contact_id: ContactId, *, timeout: float | None = None,
    ) -> ContactLike | None: ...
    async def find_by_mobile(
        self, mobile: str, *, timeout: float | None = None,
    ) -> ContactLike | None: ...
    async def create(
        self, fields: Mapping[str, str], *, timeout: float | None = None,
    ) -> ContactLike: ...
    async def replace(
        self,
        contact_id: ContactId,
        fields: Mapping[str, str],
        *,
        timeout: float | None = None,
    ) -> ContactLike | None: ...
    async def delete(
        self, contact_id: ContactId, *, timeout: float | None = None,
    ) -> bool: ...
