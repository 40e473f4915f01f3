"""Root Route - welcome payload, doubles as a smoke test for clients."""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["root"])


@router.get("/")
async def welcome():
    return {
        "msg": "Welcome to the contact book server",
        "data": {"output": datetime.now(timezone.utc).isoformat()},
    }
