"""Contact Service - CRUD handlers for contacts.

Invariants:
    - Order per request: validate payload -> parse id -> group reference (optional)
      -> duplicate pre-check -> store call
    - A request failing validation or id parsing never reaches the store
    - Mobile uniqueness: pre-check on create is an early exit; the store's unique
      index is authoritative and raises the same DuplicateMobileError
    - replace does not pre-check mobile against other contacts; only the index guards it
    - groupId is a soft reference unless enforce_group_reference is on

Design Decisions:
    - replace goes straight to the store (one round trip); None -> 404
    - Payload keys are wire names (imageUrl, groupId); stores receive ORM attribute names
"""

import logging
from collections.abc import Mapping, Sequence

from contactbook.core.domain_types import (
    CONTACT_ATTRIBUTES, ContactId, EntityKind, GroupId,
)
from contactbook.core.errors import (
    DuplicateMobileError, ResourceNotFoundError, ValidationFailedError, Violation,
)
from contactbook.core.identifiers import is_identifier, parse_identifier
from contactbook.core.repository_protocols import ContactLike, ContactStore, GroupStore
from contactbook.core.validate_payload import raise_for_violations, validate_contact_payload

logger = logging.getLogger(__name__)

UNKNOWN_GROUP_MESSAGE = "groupId does not reference an existing group"


def to_contact_fields(payload: Mapping) -> dict[str, str]:
    """Map a validated wire payload onto ORM attribute names."""
    return {
        attribute: payload[wire.value]
        for wire, attribute in CONTACT_ATTRIBUTES.items()
    }


class ContactService:
    """Contact request handlers."""

    def __init__(
        self,
        contacts: ContactStore,
        groups: GroupStore | None = None,
        timeout: float | None = None,
        enforce_group_reference: bool = False,
    ):
        if enforce_group_reference and groups is None:
            raise ValueError("enforce_group_reference requires a GroupStore")
        self.contacts = contacts
        self.groups = groups
        self.timeout = timeout
        self.enforce_group_reference = enforce_group_reference

    async def list_contacts(self) -> Sequence[ContactLike]:
        return await self.contacts.list_all(timeout=self.timeout)

    async def get_contact(self, raw_id: str) -> ContactLike:
        contact_id = self._parse_id(raw_id)
        contact = await self.contacts.find_by_id(contact_id, timeout=self.timeout)
        if contact is None:
            raise ResourceNotFoundError(EntityKind.CONTACT.value, raw_id)
        return contact

    async def create_contact(self, payload: Mapping) -> ContactLike:
        raise_for_violations(validate_contact_payload(payload))
        fields = to_contact_fields(payload)
        await self._check_group_reference(fields["group_id"])

        existing = await self.contacts.find_by_mobile(
            fields["mobile"], timeout=self.timeout,
        )
        if existing is not None:
            logger.info(
                "Mobile number already taken",
                extra={"entity": EntityKind.CONTACT.value, "entity_id": str(existing.id)},
            )
            raise DuplicateMobileError(fields["mobile"])

        contact = await self.contacts.create(fields, timeout=self.timeout)
        logger.info(
            "Contact created",
            extra={"entity": EntityKind.CONTACT.value, "entity_id": str(contact.id)},
        )
        return contact

    async def replace_contact(self, raw_id: str, payload: Mapping) -> ContactLike:
        """Full replacement. Every field must be supplied again."""
        raise_for_violations(validate_contact_payload(payload))
        contact_id = self._parse_id(raw_id)
        fields = to_contact_fields(payload)
        await self._check_group_reference(fields["group_id"])

        contact = await self.contacts.replace(contact_id, fields, timeout=self.timeout)
        if contact is None:
            raise ResourceNotFoundError(EntityKind.CONTACT.value, raw_id)
        logger.info(
            "Contact replaced",
            extra={"entity": EntityKind.CONTACT.value, "entity_id": raw_id},
        )
        return contact

    async def delete_contact(self, raw_id: str) -> None:
        contact_id = self._parse_id(raw_id)
        deleted = await self.contacts.delete(contact_id, timeout=self.timeout)
        if not deleted:
            raise ResourceNotFoundError(EntityKind.CONTACT.value, raw_id)
        logger.info(
            "Contact deleted",
            extra={"entity": EntityKind.CONTACT.value, "entity_id": raw_id},
        )

    def _parse_id(self, raw_id: str) -> ContactId:
        return ContactId(parse_identifier(raw_id, EntityKind.CONTACT.value))

    async def _check_group_reference(self, raw_group_id: str) -> None:
        if not self.enforce_group_reference:
            return
        group = None
        if is_identifier(raw_group_id):
            group = await self.groups.find_by_id(
                GroupId(parse_identifier(raw_group_id, EntityKind.GROUP.value)),
                timeout=self.timeout,
            )
        if group is None:
            raise ValidationFailedError(
                [Violation("groupId", UNKNOWN_GROUP_MESSAGE)],
            )
