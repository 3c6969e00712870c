from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.workouts.schemas import WorkoutCreate, WorkoutUpdate, WorkoutResponse, LibraryWorkout, Tier
from g4g.modules.workouts.service import WorkoutService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional
from datetime import date

router = APIRouter(prefix="/workouts", tags=["workouts"])


def get_workout_service(supabase: Client = Depends(get_supabase)) -> WorkoutService:
    return WorkoutService(supabase)


@router.post("", response_model=WorkoutResponse, status_code=201)
async def create_workout(
    workout_data: WorkoutCreate,
    profile: Dict = Depends(require_permission("workouts:create")),
    service: WorkoutService = Depends(get_workout_service)
):
    """Create a workout (coach/admin)"""
    return service.create_workout(workout_data, profile["id"])


@router.get("/today", response_model=Optional[WorkoutResponse])
async def get_todays_workout(
    profile: Dict = Depends(require_permission("workouts:read")),
    service: WorkoutService = Depends(get_workout_service)
):
    """Today's mission for the caller's tier"""
    return service.get_workout_for_today(profile.get("tier"))


@router.get("/upcoming", response_model=List[WorkoutResponse])
async def get_upcoming_workouts(
    profile: Dict = Depends(require_permission("workouts:read")),
    service: WorkoutService = Depends(get_workout_service)
):
    return service.list_upcoming(profile.get("tier"))


@router.get("/library", response_model=List[LibraryWorkout])
async def get_library(
    tier: Optional[Tier] = None,
    search: Optional[str] = Query(None, max_length=100),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    profile: Dict = Depends(require_permission("workouts:read")),
    service: WorkoutService = Depends(get_workout_service)
):
    """Workout library with tier locks applied"""
    return service.list_library(profile, tier=tier, search=search, limit=limit, offset=offset)


@router.get("/by-date/{day}", response_model=List[WorkoutResponse])
async def get_workouts_by_date(
    day: date,
    profile: Dict = Depends(require_permission("workouts:create")),
    service: WorkoutService = Depends(get_workout_service)
):
    """All tiers' workouts for a date (coach planning view)"""
    return service.list_by_date(day)


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: str,
    profile: Dict = Depends(require_permission("workouts:read")),
    service: WorkoutService = Depends(get_workout_service)
):
    return service.get_accessible_workout(workout_id, profile)


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: str,
    workout_data: WorkoutUpdate,
    profile: Dict = Depends(require_permission("workouts:update")),
    service: WorkoutService = Depends(get_workout_service)
):
    return service.update_workout(workout_id, workout_data)


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: str,
    profile: Dict = Depends(require_permission("workouts:delete")),
    service: WorkoutService = Depends(get_workout_service)
):
    service.delete_workout(workout_id)
    return None
