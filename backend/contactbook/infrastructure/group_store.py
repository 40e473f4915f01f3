"""Group Store - SQLAlchemy implementation of core.repository_protocols.GroupStore.

Invariants:
    - list_all returns groups in insertion order (created_at, then id)
    - create relies on uq_groups_name; a rejected insert raises DuplicateGroupNameError
"""

from sqlalchemy import select

from contactbook.core.domain_types import EntityKind, GroupId
from contactbook.core.errors import DuplicateGroupNameError
from contactbook.infrastructure.sql_store import SqlStore
from contactbook.models.group import Group


class SqlGroupStore(SqlStore):
    """Group persistence over one AsyncSession."""

    entity = EntityKind.GROUP

    async def list_all(self, *, timeout: float | None = None) -> list[Group]:
        async def work():
            result = await self.db.execute(
                select(Group).order_by(Group.created_at, Group.id),
            )
            return list(result.scalars().all())
        return await self._execute("list", work, timeout)

    async def find_by_id(
        self, group_id: GroupId, *, timeout: float | None = None,
    ) -> Group | None:
        async def work():
            return await self.db.get(Group, group_id)
        return await self._execute("find_by_id", work, timeout)

    async def find_by_name(
        self, name: str, *, timeout: float | None = None,
    ) -> Group | None:
        async def work():
            result = await self.db.execute(
                select(Group).where(Group.name == name),
            )
            return result.scalar_one_or_none()
        return await self._execute("find_by_name", work, timeout)

    async def create(self, name: str, *, timeout: float | None = None) -> Group:
        async def work():
            group = Group(name=name)
            self.db.add(group)
            await self.db.commit()
            return group
        return await self._execute(
            "create", work, timeout,
            on_duplicate=lambda: DuplicateGroupNameError(name),
        )
