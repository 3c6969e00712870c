from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.leaderboard.schemas import LeaderboardResponse
from g4g.modules.leaderboard.service import LeaderboardService
from g4g.modules.workouts.schemas import Tier
from g4g.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def get_leaderboard_service(supabase: Client = Depends(get_supabase)) -> LeaderboardService:
    return LeaderboardService(supabase)


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    tier: Optional[Tier] = None,
    profile: Dict = Depends(get_current_profile),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    """Top operators by XP plus the caller's own standing"""
    return service.get_leaderboard(profile, tier=tier)
