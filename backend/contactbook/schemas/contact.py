"""Contact Schemas - Pydantic models for the contact API boundary.

Invariants:
    - Wire names are camelCase (imageUrl, groupId, createdAt, updatedAt)
    - Payloads accept only the camelCase spelling; response models also read
      snake_case ORM attributes (populate_by_name)
    - ContactPayload only checks JSON types; presence and email grammar are
      checked by core.validate_payload so every violation is reported together

Design Decisions:
    - All payload fields Optional: a missing field must reach the core validator
      instead of failing early with a single Pydantic error
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ContactPayload(BaseModel):
    """Create/replace body. Unknown keys are ignored."""
    model_config = ConfigDict(alias_generator=to_camel)

    name: str | None = None
    company: str | None = None
    email: str | None = None
    title: str | None = None
    mobile: str | None = None
    image_url: str | None = None
    group_id: str | None = None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ContactResponse(BaseModel):
    """Persisted contact as returned to clients."""
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True,
    )

    id: UUID
    name: str
    company: str
    email: str
    title: str
    mobile: str
    image_url: str
    group_id: str
    created_at: datetime
    updated_at: datetime
