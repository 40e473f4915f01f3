"""Identifier Codec - parses opaque entity ids from their external string form.

Invariants:
    - PURE: no IO, never touches the store
    - Only canonical UUID text is accepted: 32 hex digits, bare or 8-4-4-4-12 hyphenated
    - Malformed input raises InvalidIdentifierError (client error), never a driver error
"""

import re
from uuid import UUID

from contactbook.core.errors import InvalidIdentifierError

_CANONICAL = re.compile(
    r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}",
)


def is_identifier(raw: object) -> bool:
    """True when raw is a string in canonical UUID form."""
    if not isinstance(raw, str) or not _CANONICAL.fullmatch(raw):
        return False
    # hyphens must be all-or-nothing
    return raw.count("-") in (0, 4)


def parse_identifier(raw: object, entity: str) -> UUID:
    """Parse raw into a UUID or raise InvalidIdentifierError."""
    if not is_identifier(raw):
        raise InvalidIdentifierError(entity, str(raw))
    return UUID(raw)


def format_identifier(identifier: UUID) -> str:
    return str(identifier)
