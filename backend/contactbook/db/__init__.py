"""Database Infrastructure - declarative base shared by the ORM models.

Invariants:
    - Single async engine per process (owned by infrastructure.database)
"""
