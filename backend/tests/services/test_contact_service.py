"""Contact Service - handler orchestration against mocked stores.

Tests cover:
    - Validation failures never reach the store
    - Malformed ids never reach the store
    - Duplicate mobile pre-check raises DuplicateMobileError without creating
    - None/False from the store become ResourceNotFoundError
    - Payload wire names are mapped to ORM attribute names
    - Optional group reference enforcement
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from contactbook.core.errors import (
    DuplicateMobileError,
    InvalidIdentifierError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from contactbook.services.contact_service import ContactService, to_contact_fields
from tests.services.payloads import contact_payload


def _make_contact_store():
    store = AsyncMock()
    store.find_by_mobile.return_value = None
    store.create.side_effect = lambda fields, timeout=None: SimpleNamespace(
        id=uuid4(), **fields,
    )
    return store


def _make_group_store(existing: bool = True):
    store = AsyncMock()
    store.find_by_id.return_value = (
        SimpleNamespace(id=uuid4(), name="Friends") if existing else None
    )
    return store


# ─── create_contact ──────────────────────────────────────────────

async def test_create_maps_wire_fields_and_returns_entity():
    contacts = _make_contact_store()
    service = ContactService(contacts)

    contact = await service.create_contact(contact_payload(imageUrl="pic", groupId="g1"))

    fields = contacts.create.await_args.args[0]
    assert fields["image_url"] == "pic"
    assert fields["group_id"] == "g1"
    assert contact.mobile == "123"
    assert contact.id is not None


async def test_create_with_missing_field_never_touches_store():
    contacts = _make_contact_store()
    service = ContactService(contacts)
    payload = contact_payload()
    del payload["company"]

    with pytest.raises(ValidationFailedError) as info:
        await service.create_contact(payload)

    assert info.value.fields == ["company"]
    contacts.find_by_mobile.assert_not_awaited()
    contacts.create.assert_not_awaited()


async def test_create_reports_all_violations():
    service = ContactService(_make_contact_store())
    with pytest.raises(ValidationFailedError) as info:
        await service.create_contact({"name": "A", "email": "not-an-email"})
    assert info.value.fields == [
        "company", "email", "title", "mobile", "imageUrl", "groupId",
    ]


async def test_create_duplicate_mobile_is_rejected_before_create():
    contacts = _make_contact_store()
    contacts.find_by_mobile.return_value = SimpleNamespace(id=uuid4(), mobile="123")
    service = ContactService(contacts)

    with pytest.raises(DuplicateMobileError):
        await service.create_contact(contact_payload())
    contacts.create.assert_not_awaited()


async def test_store_level_duplicate_propagates_unchanged():
    contacts = _make_contact_store()
    contacts.create.side_effect = DuplicateMobileError("123")
    service = ContactService(contacts)

    with pytest.raises(DuplicateMobileError):
        await service.create_contact(contact_payload())


async def test_timeout_forwarded_to_every_store_call():
    contacts = _make_contact_store()
    service = ContactService(contacts, timeout=1.5)
    await service.create_contact(contact_payload())
    assert contacts.find_by_mobile.await_args.kwargs["timeout"] == 1.5
    assert contacts.create.await_args.kwargs["timeout"] == 1.5


# ─── get / replace / delete ──────────────────────────────────────

async def test_get_malformed_id_never_reaches_store():
    contacts = _make_contact_store()
    service = ContactService(contacts)
    with pytest.raises(InvalidIdentifierError):
        await service.get_contact("not-a-valid-id")
    contacts.find_by_id.assert_not_awaited()


async def test_get_unknown_id_is_not_found():
    contacts = _make_contact_store()
    contacts.find_by_id.return_value = None
    service = ContactService(contacts)
    with pytest.raises(ResourceNotFoundError):
        await service.get_contact(str(uuid4()))


async def test_replace_validates_before_parsing_id():
    contacts = _make_contact_store()
    service = ContactService(contacts)
    with pytest.raises(ValidationFailedError):
        await service.replace_contact("garbage", {"name": "A"})
    contacts.replace.assert_not_awaited()


async def test_replace_malformed_id_is_client_error():
    contacts = _make_contact_store()
    service = ContactService(contacts)
    with pytest.raises(InvalidIdentifierError):
        await service.replace_contact("garbage", contact_payload())
    contacts.replace.assert_not_awaited()


async def test_replace_unknown_id_is_not_found():
    contacts = _make_contact_store()
    contacts.replace.return_value = None
    service = ContactService(contacts)
    with pytest.raises(ResourceNotFoundError):
        await service.replace_contact(str(uuid4()), contact_payload())


async def test_replace_skips_mobile_pre_check():
    contacts = _make_contact_store()
    contacts.replace.return_value = SimpleNamespace(id=uuid4(), mobile="456")
    service = ContactService(contacts)
    await service.replace_contact(str(uuid4()), contact_payload(mobile="456"))
    contacts.find_by_mobile.assert_not_awaited()


async def test_delete_unknown_id_is_not_found():
    contacts = _make_contact_store()
    contacts.delete.return_value = False
    service = ContactService(contacts)
    with pytest.raises(ResourceNotFoundError):
        await service.delete_contact(str(uuid4()))


async def test_delete_existing_returns_none():
    contacts = _make_contact_store()
    contacts.delete.return_value = True
    service = ContactService(contacts)
    assert await service.delete_contact(str(uuid4())) is None


# ─── group reference ─────────────────────────────────────────────

async def test_group_reference_is_soft_by_default():
    groups = _make_group_store(existing=False)
    service = ContactService(_make_contact_store(), groups)
    await service.create_contact(contact_payload(groupId="anything"))
    groups.find_by_id.assert_not_awaited()


async def test_enforced_group_reference_rejects_unknown_group():
    groups = _make_group_store(existing=False)
    contacts = _make_contact_store()
    service = ContactService(contacts, groups, enforce_group_reference=True)
    with pytest.raises(ValidationFailedError) as info:
        await service.create_contact(contact_payload(groupId=str(uuid4())))
    assert info.value.fields == ["groupId"]
    contacts.create.assert_not_awaited()


async def test_enforced_group_reference_rejects_malformed_group_id():
    groups = _make_group_store(existing=True)
    service = ContactService(
        _make_contact_store(), groups, enforce_group_reference=True,
    )
    with pytest.raises(ValidationFailedError):
        await service.create_contact(contact_payload(groupId="not-a-uuid"))
    groups.find_by_id.assert_not_awaited()


async def test_enforced_group_reference_accepts_existing_group():
    groups = _make_group_store(existing=True)
    service = ContactService(
        _make_contact_store(), groups, enforce_group_reference=True,
    )
    contact = await service.create_contact(contact_payload(groupId=str(uuid4())))
    assert contact.id is not None


def test_enforcement_without_group_store_is_rejected():
    with pytest.raises(ValueError):
        ContactService(_make_contact_store(), None, enforce_group_reference=True)


def test_to_contact_fields_covers_every_attribute():
    fields = to_contact_fields(contact_payload())
    assert set(fields) == {
        "name", "company", "email", "title", "mobile", "image_url", "group_id",
    }
