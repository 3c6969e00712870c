from fastapi import APIRouter, Depends, HTTPException, Query, status
from g4g.database.supabase_client import get_supabase
from g4g.modules.profiles.schemas import (
    ProfileResponse, ProfileMeResponse, ProfileUpdate, DossierUpdate,
    RosterResponse, RoleUpdate, CoachAssign, BanUpdate
)
from g4g.modules.profiles.service import ProfileService
from g4g.core.dependencies import require_permission, require_admin, can_view_profile
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileMeResponse)
async def get_my_profile(
    profile: Dict = Depends(require_permission("profiles:read")),
    service: ProfileService = Depends(get_profile_service)
):
    """Current user's profile with rank progression"""
    return service.get_me(profile)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    profile: Dict = Depends(require_permission("profiles:update")),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(profile["id"], profile_data)


@router.put("/me/dossier", response_model=ProfileResponse)
async def save_my_dossier(
    dossier: DossierUpdate,
    profile: Dict = Depends(require_permission("profiles:update")),
    service: ProfileService = Depends(get_profile_service)
):
    """Save the onboarding fitness dossier"""
    return service.update_dossier(profile["id"], dossier)


@router.get("/roster", response_model=RosterResponse)
async def list_roster(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    profile: Dict = Depends(require_permission("profiles:roster")),
    service: ProfileService = Depends(get_profile_service)
):
    """Trainees assigned to the calling coach"""
    return service.list_roster(profile["id"], page=page, page_size=page_size, search=search)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    profile: Dict = Depends(require_permission("profiles:read")),
    service: ProfileService = Depends(get_profile_service),
    supabase: Client = Depends(get_supabase)
):
    """Get a profile (self, admin, or the user's coach)"""
    if not can_view_profile(profile, user_id, supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Profile not accessible")
    return service.get_profile(user_id)


@router.put("/{user_id}/role", response_model=ProfileResponse)
async def set_role(
    user_id: str,
    role_data: RoleUpdate,
    admin: Dict = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    return service.set_role(user_id, role_data.role)


@router.put("/{user_id}/coach", response_model=ProfileResponse)
async def assign_coach(
    user_id: str,
    coach_data: CoachAssign,
    admin: Dict = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    return service.assign_coach(user_id, coach_data.coach_id)


@router.put("/{user_id}/ban", response_model=ProfileResponse)
async def set_banned(
    user_id: str,
    ban_data: BanUpdate,
    admin: Dict = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Suspend or reinstate a user"""
    return service.set_banned(user_id, ban_data.banned, admin["id"])
