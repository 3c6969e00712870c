from fastapi import APIRouter, Depends
from g4g.modules.auth.schemas import CurrentUserResponse
from g4g.core.dependencies import get_current_user_id, get_current_profile
from g4g.config.permissions_config import get_role_permissions
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    profile: Dict = Depends(get_current_profile),
):
    """Get current authenticated user, their role and permissions (for frontend UI)."""
    role = profile.get("role") or "user"
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        role=role,
        tier=profile.get("tier"),
        user_metadata=current_user.get("user_metadata") or {},
        permissions=get_role_permissions(role),
    )
