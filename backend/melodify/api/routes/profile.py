"""Profile: the caller's public profile (email only)."""

from fastapi import APIRouter, Depends

from melodify.api.dependencies import get_current_user
from melodify.core.domain_types import AuthenticatedUser

router = APIRouter(tags=["profile"])


@router.get("/profile")
async def get_profile(user: AuthenticatedUser = Depends(get_current_user)):
    return {"profile": {"email": user.email}}
