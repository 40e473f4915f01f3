"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - GroupId, ContactId wrap UUIDs; never pass raw id strings past the codec
    - ContactField lists the external (wire) field names in validation order

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

GroupId = NewType("GroupId", UUID)
ContactId = NewType("ContactId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """Entity names as they appear in messages and log extras."""
    GROUP = "Group"
    CONTACT = "Contact"


class ContactField(str, Enum):
    """Contact payload fields, wire names, in the order violations are reported."""
    NAME = "name"
    COMPANY = "company"
    EMAIL = "email"
    TITLE = "title"
    MOBILE = "mobile"
    IMAGE_URL = "imageUrl"
    GROUP_ID = "groupId"


# Wire name -> ORM attribute name
CONTACT_ATTRIBUTES: dict[ContactField, str] = {
    ContactField.NAME: "name",
    ContactField.COMPANY: "company",
    ContactField.EMAIL: "email",
    ContactField.TITLE: "title",
    ContactField.MOBILE: "mobile",
    ContactField.IMAGE_URL: "image_url",
    ContactField.GROUP_ID: "group_id",
}
