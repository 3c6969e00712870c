from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.missions.schemas import (
    MissionComplete, MissionUpdate, MissionLogResponse, MissionCompleteResponse,
    MissionStats, WeeklyCount, HasLoggedResponse
)
from g4g.modules.missions.service import MissionService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional
from datetime import date

router = APIRouter(prefix="/missions", tags=["missions"])


def get_mission_service(supabase: Client = Depends(get_supabase)) -> MissionService:
    return MissionService(supabase)


@router.post("", response_model=MissionCompleteResponse, status_code=201)
async def complete_mission(
    mission: MissionComplete,
    profile: Dict = Depends(require_permission("missions:create")),
    service: MissionService = Depends(get_mission_service)
):
    """Log a completed workout and return the refreshed XP / streak"""
    return service.complete_mission(profile, mission)


@router.get("", response_model=List[MissionLogResponse])
async def list_missions(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    profile: Dict = Depends(require_permission("missions:read")),
    service: MissionService = Depends(get_mission_service)
):
    return service.list_logs(profile["id"], limit=limit, offset=offset)


@router.get("/latest", response_model=Optional[MissionLogResponse])
async def get_latest_mission(
    profile: Dict = Depends(require_permission("missions:read")),
    service: MissionService = Depends(get_mission_service)
):
    return service.get_latest_log(profile["id"])


@router.get("/range", response_model=List[MissionLogResponse])
async def list_missions_in_range(
    start: date,
    end: date,
    profile: Dict = Depends(require_permission("missions:read")),
    service: MissionService = Depends(get_mission_service)
):
    return service.list_logs_in_range(profile["id"], start, end)


@router.get("/stats", response_model=MissionStats)
async def get_mission_stats(
    profile: Dict = Depends(require_permission("missions:read")),
    service: MissionService = Depends(get_mission_service)
):
    return service.get_stats(profile)


@router.get("/consistency", response_model=List[WeeklyCount])
async def get_consistency(
    weeks: int = Query(4, ge=1, le=52),
    profile: Dict = Depends(require_permission("missions:read")),
    service: MissionService = Depends(get_mission_service)
):
    """Workouts per week, oldest week first"""
    return service.get_weekly_consistency(profile["id"], weeks=weeks)


@router.get("/today/{workout_id}", response_model=HasLoggedResponse)
async def has_logged_today(
    workout_id: str,
    profile: Dict = Depends(require_permission("missions:read")),
    service: MissionService = Depends(get_mission_service)
):
    return HasLoggedResponse(has_logged=service.has_logged_today(profile["id"], workout_id))


@router.put("/{log_id}", response_model=MissionLogResponse)
async def update_mission(
    log_id: str,
    updates: MissionUpdate,
    profile: Dict = Depends(require_permission("missions:update")),
    service: MissionService = Depends(get_mission_service)
):
    return service.update_log(log_id, profile["id"], updates)


@router.delete("/{log_id}", status_code=204)
async def delete_mission(
    log_id: str,
    profile: Dict = Depends(require_permission("missions:delete")),
    service: MissionService = Depends(get_mission_service)
):
    service.delete_log(log_id, profile["id"])
    return None
