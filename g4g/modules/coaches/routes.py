from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.coaches.schemas import CoachDirectoryEntry, CoachProfileUpdate
from g4g.modules.coaches.service import CoachService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/coaches", tags=["coaches"])


def get_coach_service(supabase: Client = Depends(get_supabase)) -> CoachService:
    return CoachService(supabase)


@router.get("", response_model=List[CoachDirectoryEntry])
async def list_coaches(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius: float = Query(50, gt=0, le=500),
    search: Optional[str] = Query(None, max_length=100),
    specialty: Optional[str] = Query(None, max_length=100),
    service: CoachService = Depends(get_coach_service)
):
    """Public coach directory; no sign-in required"""
    return service.list_directory(lat=lat, lng=lng, radius_miles=radius, search=search, specialty=specialty)


@router.get("/specialties", response_model=List[str])
async def list_specialties(
    service: CoachService = Depends(get_coach_service)
):
    return service.list_specialties()


@router.put("/me", response_model=CoachDirectoryEntry)
async def update_my_listing(
    update: CoachProfileUpdate,
    profile: Dict = Depends(require_permission("coaches:update")),
    service: CoachService = Depends(get_coach_service)
):
    return service.update_directory_profile(profile, update)


@router.get("/{coach_id}", response_model=CoachDirectoryEntry)
async def get_coach(
    coach_id: str,
    service: CoachService = Depends(get_coach_service)
):
    return service.get_public_coach(coach_id)
