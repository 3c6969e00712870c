import logging
from datetime import date, timedelta
from supabase import Client
from g4g.modules.missions.schemas import (
    MissionComplete, MissionUpdate, MissionLogResponse, MissionCompleteResponse,
    MissionStats, WeeklyCount
)
from g4g.core.ranks import has_ranked_up, get_xp_breakdown
from g4g.core.dates import today, today_iso
from g4g.config import settings
from typing import Iterable, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def group_logs_by_week(log_dates: Iterable[date], weeks: int, end: date) -> List[WeeklyCount]:
    """
    Bucket log dates into weeks counted back from end.
    Week 1 is the oldest bucket and Week N the current one; empty weeks report 0.
    """
    counts = {}
    for log_date in log_dates:
        week_num = (end - log_date).days // 7
        if 0 <= week_num < weeks:
            counts[week_num] = counts.get(week_num, 0) + 1
    return [
        WeeklyCount(week=f"Week {weeks - i}", count=counts.get(i, 0))
        for i in range(weeks - 1, -1, -1)
    ]


class MissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def has_logged_today(self, user_id: str, workout_id: str) -> bool:
        try:
            result = self.supabase.table("user_logs")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("workout_id", workout_id)\
                .eq("date", today_iso())\
                .limit(1)\
                .execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Error checking today's log for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _check_log_date(self, log_date: Optional[date]) -> date:
        """Missions are logged for today or up to mission_backdate_days in the past"""
        current = today()
        if log_date is None:
            return current
        if log_date > current:
            raise HTTPException(status_code=400, detail="Cannot log a mission for a future date")
        if log_date < current - timedelta(days=settings.mission_backdate_days):
            raise HTTPException(
                status_code=400,
                detail=f"Missions can only be backdated {settings.mission_backdate_days} days"
            )
        return log_date

    def complete_mission(self, profile: dict, mission: MissionComplete) -> MissionCompleteResponse:
        """
        Log a completed workout. XP, streak and badges are applied by database
        triggers on user_logs, so the profile is re-read after the insert.
        """
        user_id = profile["id"]
        log_date = self._check_log_date(mission.date).isoformat()
        try:
            workout = self.supabase.table("workouts")\
                .select("id")\
                .eq("id", mission.workout_id)\
                .limit(1)\
                .execute()
            if not workout.data:
                raise HTTPException(status_code=404, detail="Workout not found")

            existing = self.supabase.table("user_logs")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("workout_id", mission.workout_id)\
                .eq("date", log_date)\
                .limit(1)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=400, detail="Mission already logged for this date")

            result = self.supabase.table("user_logs").insert({
                "user_id": user_id,
                "workout_id": mission.workout_id,
                "date": log_date,
                "duration": mission.duration,
                "notes": mission.notes,
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to log mission")

            refreshed = self.supabase.table("profiles")\
                .select("xp, current_streak, workout_count")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
            stats = refreshed.data[0] if refreshed.data else {}
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error logging mission for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        previous_xp = profile.get("xp") or 0
        xp = stats.get("xp") or 0
        ranked_up = has_ranked_up(previous_xp, xp)
        if ranked_up:
            logger.info(f"User {user_id} ranked up at {xp} XP")
        return MissionCompleteResponse(
            log=MissionLogResponse(**result.data[0]),
            xp=xp,
            current_streak=stats.get("current_streak") or 0,
            workout_count=stats.get("workout_count") or 0,
            ranked_up=ranked_up,
            rank=get_xp_breakdown(xp),
        )

    def list_logs(self, user_id: str, limit: int = 50, offset: int = 0) -> List[MissionLogResponse]:
        try:
            result = self.supabase.table("user_logs")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("date", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [MissionLogResponse(**log) for log in result.data]
        except Exception as e:
            logger.error(f"Error fetching logs for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_latest_log(self, user_id: str) -> Optional[MissionLogResponse]:
        try:
            result = self.supabase.table("user_logs")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("date", desc=True)\
                .limit(1)\
                .execute()
            return MissionLogResponse(**result.data[0]) if result.data else None
        except Exception as e:
            logger.error(f"Error fetching latest log for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_logs_in_range(self, user_id: str, start: date, end: date) -> List[MissionLogResponse]:
        if start > end:
            raise HTTPException(status_code=400, detail="start must be on or before end")
        try:
            result = self.supabase.table("user_logs")\
                .select("*")\
                .eq("user_id", user_id)\
                .gte("date", start.isoformat())\
                .lte("date", end.isoformat())\
                .order("date", desc=True)\
                .execute()
            return [MissionLogResponse(**log) for log in result.data]
        except Exception as e:
            logger.error(f"Error fetching logs in range for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_stats(self, profile: dict) -> MissionStats:
        """Total log count plus XP and streak as maintained on the profile"""
        try:
            result = self.supabase.table("user_logs")\
                .select("id", count="exact")\
                .eq("user_id", profile["id"])\
                .execute()
            return MissionStats(
                total_logs=result.count or 0,
                total_xp=profile.get("xp") or 0,
                current_streak=profile.get("current_streak") or 0,
            )
        except Exception as e:
            logger.error(f"Error fetching mission stats for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_weekly_consistency(self, user_id: str, weeks: int = 4) -> List[WeeklyCount]:
        try:
            end = today()
            start = end - timedelta(days=weeks * 7)
            result = self.supabase.table("user_logs")\
                .select("date")\
                .eq("user_id", user_id)\
                .gte("date", start.isoformat())\
                .lte("date", end.isoformat())\
                .order("date")\
                .execute()
            dates = [date.fromisoformat(str(row["date"])[:10]) for row in result.data]
            return group_logs_by_week(dates, weeks, end)
        except Exception as e:
            logger.error(f"Error fetching weekly consistency for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_log(self, log_id: str, user_id: str, updates: MissionUpdate) -> MissionLogResponse:
        try:
            update_data = updates.model_dump(exclude_unset=True)
            if not update_data:
                raise HTTPException(status_code=400, detail="Nothing to update")
            result = self.supabase.table("user_logs")\
                .update(update_data)\
                .eq("id", log_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Log not found")
            return MissionLogResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating log {log_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_log(self, log_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("user_logs")\
                .delete()\
                .eq("id", log_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Log not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting log {log_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
