import logging
from datetime import date
from supabase import Client
from g4g.modules.workouts.schemas import WorkoutCreate, WorkoutUpdate, WorkoutResponse, LibraryWorkout
from g4g.core.tiers import has_tier_access, DEFAULT_TIER
from g4g.core.dates import today_iso, next_days_window
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class WorkoutService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_workout(self, workout_data: WorkoutCreate, user_id: str) -> WorkoutResponse:
        """Create a workout (coach/admin)"""
        try:
            payload = workout_data.model_dump(mode="json")
            payload["created_by"] = user_id
            result = self.supabase.table("workouts").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create workout")

            logger.info(f"Workout {result.data[0]['id']} created for {workout_data.tier} on {workout_data.scheduled_date}")
            return WorkoutResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating workout: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_workout_by_id(self, workout_id: str) -> WorkoutResponse:
        try:
            result = self.supabase.table("workouts")\
                .select("*")\
                .eq("id", workout_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Workout not found")

            return WorkoutResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching workout {workout_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_accessible_workout(self, workout_id: str, profile: dict) -> WorkoutResponse:
        """Get a workout, enforcing the caller's tier"""
        workout = self.get_workout_by_id(workout_id)
        if not has_tier_access(profile, workout.tier):
            raise HTTPException(
                status_code=403,
                detail=f"Workout requires tier {workout.tier}. Retake the Zero Day test to unlock it."
            )
        return workout

    def update_workout(self, workout_id: str, workout_data: WorkoutUpdate) -> WorkoutResponse:
        try:
            update_data = workout_data.model_dump(mode="json", exclude_unset=True)
            if not update_data:
                return self.get_workout_by_id(workout_id)

            result = self.supabase.table("workouts")\
                .update(update_data)\
                .eq("id", workout_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Workout not found")

            return WorkoutResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating workout {workout_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_workout(self, workout_id: str) -> bool:
        try:
            result = self.supabase.table("workouts")\
                .delete()\
                .eq("id", workout_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Workout not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting workout {workout_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_workout_for_today(self, tier: Optional[str]) -> Optional[WorkoutResponse]:
        """Today's workout for a tier; None when nothing is scheduled"""
        try:
            result = self.supabase.table("workouts")\
                .select("*")\
                .eq("tier", tier or DEFAULT_TIER)\
                .eq("scheduled_date", today_iso())\
                .limit(1)\
                .execute()
            return WorkoutResponse(**result.data[0]) if result.data else None
        except Exception as e:
            logger.error(f"Error fetching today's workout: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_upcoming(self, tier: Optional[str]) -> List[WorkoutResponse]:
        """Workouts for a tier over the next 7 days"""
        try:
            start, end = next_days_window(7)
            result = self.supabase.table("workouts")\
                .select("*")\
                .eq("tier", tier or DEFAULT_TIER)\
                .gte("scheduled_date", start)\
                .lte("scheduled_date", end)\
                .order("scheduled_date")\
                .execute()
            return [WorkoutResponse(**w) for w in result.data]
        except Exception as e:
            logger.error(f"Error fetching upcoming workouts: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_by_date(self, day: date) -> List[WorkoutResponse]:
        try:
            result = self.supabase.table("workouts")\
                .select("*")\
                .eq("scheduled_date", day.isoformat())\
                .order("tier")\
                .execute()
            return [WorkoutResponse(**w) for w in result.data]
        except Exception as e:
            logger.error(f"Error fetching workouts for {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_library(
        self,
        profile: dict,
        tier: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[LibraryWorkout]:
        """Workout library, newest first. Workouts above the caller's tier come back locked with content hidden."""
        try:
            query = self.supabase.table("workouts").select("*")
            if tier:
                query = query.eq("tier", tier)
            if search and search.strip():
                query = query.ilike("title", f"%{search.strip()}%")
            result = query.order("scheduled_date", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()

            library = []
            for row in result.data:
                workout = LibraryWorkout(**row)
                if not has_tier_access(profile, workout.tier):
                    workout.locked = True
                    workout.video_url = None
                    workout.sets_reps = []
                library.append(workout)
            return library
        except Exception as e:
            logger.error(f"Error fetching workout library: {e}")
            raise HTTPException(status_code=500, detail=str(e))
