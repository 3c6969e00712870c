from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.badges.schemas import BadgeDefinition, BadgeStatus, EarnedBadge, BadgeDetectRequest
from g4g.modules.badges.service import BadgeService, BADGE_DEFINITIONS
from g4g.core.dependencies import get_current_profile, fetch_profile
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/badges", tags=["badges"])


def get_badge_service(supabase: Client = Depends(get_supabase)) -> BadgeService:
    return BadgeService(supabase)


@router.get("/definitions", response_model=List[BadgeDefinition])
async def get_badge_definitions():
    return BADGE_DEFINITIONS


@router.get("/me", response_model=List[BadgeStatus])
async def get_my_badges(
    profile: Dict = Depends(get_current_profile),
    service: BadgeService = Depends(get_badge_service)
):
    """All badges with the caller's earned status"""
    return service.get_badge_status(profile["id"])


@router.get("/users/{user_id}/earned", response_model=List[EarnedBadge])
async def get_user_badges(
    user_id: str,
    profile: Dict = Depends(get_current_profile),
    service: BadgeService = Depends(get_badge_service)
):
    return service.list_earned(user_id)


@router.post("/me/detect", response_model=List[BadgeDefinition])
async def detect_my_new_badges(
    request: BadgeDetectRequest,
    profile: Dict = Depends(get_current_profile),
    service: BadgeService = Depends(get_badge_service),
    supabase: Client = Depends(get_supabase)
):
    """Badges unlocked since the stats the client saw before logging a mission"""
    current = fetch_profile(profile["id"], supabase) or profile
    return service.detect(current, request.previous_workout_count, request.previous_streak)
