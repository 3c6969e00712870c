from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.challenges.schemas import ChallengeResponse, ParticipationResponse, ChallengeLeaderboard
from g4g.modules.challenges.service import ChallengeService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/challenges", tags=["challenges"])


def get_challenge_service(supabase: Client = Depends(get_supabase)) -> ChallengeService:
    return ChallengeService(supabase)


@router.get("", response_model=List[ChallengeResponse])
async def list_challenges(
    profile: Dict = Depends(require_permission("challenges:read")),
    service: ChallengeService = Depends(get_challenge_service)
):
    return service.list_active()


@router.get("/me", response_model=List[ParticipationResponse])
async def list_my_challenges(
    profile: Dict = Depends(require_permission("challenges:read")),
    service: ChallengeService = Depends(get_challenge_service)
):
    return service.list_mine(profile["id"])


@router.post("/{challenge_id}/join", response_model=ParticipationResponse, status_code=201)
async def join_challenge(
    challenge_id: str,
    profile: Dict = Depends(require_permission("challenges:join")),
    service: ChallengeService = Depends(get_challenge_service)
):
    return service.join(profile["id"], challenge_id)


@router.delete("/{challenge_id}/join", status_code=204)
async def leave_challenge(
    challenge_id: str,
    profile: Dict = Depends(require_permission("challenges:join")),
    service: ChallengeService = Depends(get_challenge_service)
):
    service.leave(profile["id"], challenge_id)
    return None


@router.get("/{challenge_id}/leaderboard", response_model=ChallengeLeaderboard)
async def get_challenge_leaderboard(
    challenge_id: str,
    profile: Dict = Depends(require_permission("challenges:read")),
    service: ChallengeService = Depends(get_challenge_service)
):
    """Top participants by progress"""
    return service.get_leaderboard(challenge_id)
