"""Group Routes - list, fetch and create over /groups.

Invariants:
    - No update or delete endpoints: groups are administered outside this API
"""

from fastapi import APIRouter, Depends

from contactbook.api.dependencies import get_group_service
from contactbook.schemas.group import GroupCreatedResponse, GroupPayload, GroupResponse
from contactbook.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])

# Wire text existing clients match on
GROUP_CREATED_MESSAGE = "Groups is Created"


@router.get("", response_model=list[GroupResponse])
async def list_groups(service: GroupService = Depends(get_group_service)):
    groups = await service.list_groups()
    return [GroupResponse.model_validate(g) for g in groups]


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: str, service: GroupService = Depends(get_group_service),
):
    return GroupResponse.model_validate(await service.get_group(group_id))


@router.post("", response_model=GroupCreatedResponse)
async def create_group(
    body: GroupPayload, service: GroupService = Depends(get_group_service),
):
    """Create a group. A taken name answers with a duplicate message."""
    group = await service.create_group(body.model_dump())
    return GroupCreatedResponse(
        msg=GROUP_CREATED_MESSAGE, group=GroupResponse.model_validate(group),
    )
