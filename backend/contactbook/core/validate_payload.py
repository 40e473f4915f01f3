"""Payload Validation - field presence and format checks for create/replace payloads.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every violation is collected and returned; there is no fail-fast
    - Violations are ordered by ContactField declaration order
    - Whitespace-only strings count as empty

Design Decisions:
    - Return list[Violation] (not exceptions): services decide when to raise
      ValidationFailedError, tests assert on plain data
    - Email grammar delegated to email-validator (same engine as pydantic.EmailStr),
      deliverability (DNS) checks disabled: validation must stay pure
"""

from collections.abc import Mapping

from email_validator import EmailNotValidError, validate_email

from contactbook.core.domain_types import ContactField
from contactbook.core.errors import ValidationFailedError, Violation

REQUIRED_MESSAGES: dict[ContactField, str] = {
    ContactField.NAME: "Name is required",
    ContactField.COMPANY: "Company is required",
    ContactField.TITLE: "title is required",
    ContactField.MOBILE: "mobile is required",
    ContactField.IMAGE_URL: "imageUrl is required",
    ContactField.GROUP_ID: "groupId is required",
}
EMAIL_MESSAGE = "Proper email is required"
GROUP_NAME_MESSAGE = "Name is required"


def is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def is_email(value: object) -> bool:
    """True when value parses as an email address (syntax only)."""
    if is_blank(value):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_contact_payload(payload: Mapping) -> list[Violation]:
    """Check every contact field. Returns all violations, empty list when valid."""
    violations: list[Violation] = []
    for contact_field in ContactField:
        value = payload.get(contact_field.value)
        if contact_field is ContactField.EMAIL:
            if not is_email(value):
                violations.append(Violation(contact_field.value, EMAIL_MESSAGE))
        elif is_blank(value):
            violations.append(
                Violation(contact_field.value, REQUIRED_MESSAGES[contact_field]),
            )
    return violations


def validate_group_payload(payload: Mapping) -> list[Violation]:
    """Group creation only needs a non-empty name."""
    if is_blank(payload.get("name")):
        return [Violation("name", GROUP_NAME_MESSAGE)]
    return []


def raise_for_violations(violations: list[Violation]) -> None:
    """Raise ValidationFailedError carrying every violation, if there are any."""
    if violations:
        raise ValidationFailedError(violations)
