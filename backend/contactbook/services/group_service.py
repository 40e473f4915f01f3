"""Group Service - list, fetch and create groups.

Invariants:
    - create_group validates a non-empty name before any store lookup
    - Duplicate names surface as DuplicateGroupNameError whether caught by the
      pre-check or by the store's unique index (same user-facing shape)
    - Malformed ids raise InvalidIdentifierError before the store is reached
"""

import logging
from collections.abc import Mapping, Sequence

from contactbook.core.domain_types import EntityKind, GroupId
from contactbook.core.errors import DuplicateGroupNameError, ResourceNotFoundError
from contactbook.core.identifiers import parse_identifier
from contactbook.core.repository_protocols import GroupLike, GroupStore
from contactbook.core.validate_payload import raise_for_violations, validate_group_payload

logger = logging.getLogger(__name__)


class GroupService:
    """Group request handlers."""

    def __init__(self, groups: GroupStore, timeout: float | None = None):
        self.groups = groups
        self.timeout = timeout

    async def list_groups(self) -> Sequence[GroupLike]:
        return await self.groups.list_all(timeout=self.timeout)

    async def get_group(self, raw_id: str) -> GroupLike:
        group_id = GroupId(parse_identifier(raw_id, EntityKind.GROUP.value))
        group = await self.groups.find_by_id(group_id, timeout=self.timeout)
        if group is None:
            raise ResourceNotFoundError(EntityKind.GROUP.value, raw_id)
        return group

    async def create_group(self, payload: Mapping) -> GroupLike:
        """Create a group. Raises ValidationFailedError or DuplicateGroupNameError."""
        raise_for_violations(validate_group_payload(payload))
        name = payload["name"]

        existing = await self.groups.find_by_name(name, timeout=self.timeout)
        if existing is not None:
            logger.info(
                "Group name already taken",
                extra={"entity": EntityKind.GROUP.value, "entity_id": str(existing.id)},
            )
            raise DuplicateGroupNameError(name)

        group = await self.groups.create(name, timeout=self.timeout)
        logger.info(
            "Group created",
            extra={"entity": EntityKind.GROUP.value, "entity_id": str(group.id)},
        )
        return group
