"""Contact Routes - CRUD over /contacts.

Invariants:
    - contactId arrives as raw text; ContactService parses it (malformed -> 400)
    - All statuses are 200 on success, DELETE answers an empty object
"""

from fastapi import APIRouter, Depends

from contactbook.api.dependencies import get_contact_service
from contactbook.schemas.contact import ContactPayload, ContactResponse
from contactbook.services.contact_service import ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=list[ContactResponse])
async def list_contacts(service: ContactService = Depends(get_contact_service)):
    """Get all contacts."""
    contacts = await service.list_contacts()
    return [ContactResponse.model_validate(c) for c in contacts]


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: str, service: ContactService = Depends(get_contact_service),
):
    """Get one contact."""
    return ContactResponse.model_validate(await service.get_contact(contact_id))


@router.post("", response_model=ContactResponse)
async def create_contact(
    body: ContactPayload, service: ContactService = Depends(get_contact_service),
):
    """Create a contact. A taken mobile number answers with a duplicate message."""
    contact = await service.create_contact(body.to_wire())
    return ContactResponse.model_validate(contact)


@router.put("/{contact_id}", response_model=ContactResponse)
async def replace_contact(
    contact_id: str,
    body: ContactPayload,
    service: ContactService = Depends(get_contact_service),
):
    """Replace every field of a contact."""
    contact = await service.replace_contact(contact_id, body.to_wire())
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str, service: ContactService = Depends(get_contact_service),
):
    """Delete a contact."""
    await service.delete_contact(contact_id)
    return {}
