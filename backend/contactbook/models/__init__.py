"""ORM Models - SQLAlchemy declarative models for groups and contacts.

Invariants:
    - All models inherit from Base (db/base.py)
    - Each table carries exactly one business unique index (groups.name, contacts.mobile)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all runs
"""

from contactbook.models.group import Group  # noqa: F401
from contactbook.models.contact import Contact  # noqa: F401
