"""Group ORM - a named bucket that contacts point at through group_id.

Invariants:
    - id is UUID primary key (client-side default)
    - name is unique across all groups (uq_groups_name)
    - created_at/updated_at are store-managed
    - name is an unbounded String, same as the contact columns

Design Decisions:
    - No relationship() to Contact: contacts hold a soft reference only
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from contactbook.db.base import Base, utcnow


class Group(Base):
    """Group entity."""
    __tablename__ = "groups"
    __table_args__ = (UniqueConstraint("name", name="uq_groups_name"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
