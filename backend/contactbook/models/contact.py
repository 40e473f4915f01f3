"""Contact ORM - one person in the contact book.

Invariants:
    - id is UUID primary key (client-side default)
    - mobile is unique across all contacts (uq_contacts_mobile); it is the natural key
    - group_id is stored as opaque text, no FOREIGN KEY to groups
    - every business column is NOT NULL and unbounded (String without length):
      the validator puts no length limit on fields, so neither does the schema

Design Decisions:
    - group_id as String, not Uuid FK: the reference is soft;
      any non-empty string is accepted and existing data relies on it
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from contactbook.db.base import Base, utcnow


class Contact(Base):
    """Contact entity."""
    __tablename__ = "contacts"
    __table_args__ = (UniqueConstraint("mobile", name="uq_contacts_mobile"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    company: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    mobile: Mapped[str] = mapped_column(String, nullable=False)
    image_url: Mapped[str] = mapped_column(String, nullable=False)
    group_id: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
