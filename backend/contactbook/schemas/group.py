"""Group Schemas - Pydantic models for the group API boundary."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GroupPayload(BaseModel):
    name: str | None = None


class GroupResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True,
    )

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime


class GroupCreatedResponse(BaseModel):
    """Create envelope: {"msg", "group"}. Existing clients read both keys."""
    msg: str
    group: GroupResponse
