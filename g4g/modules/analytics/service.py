import logging
from datetime import date, timedelta
from supabase import Client
from g4g.modules.analytics.schemas import (
    DashboardStats, StreakDay, XPPoint, BodyMetricCreate, BodyMetricResponse
)
from g4g.core.ranks import get_xp_breakdown, XP_PER_WORKOUT
from g4g.core.dates import today, start_of_week
from typing import Any, Dict, Iterable, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def build_streak_history(log_dates: Iterable[date], start: date, end: date) -> List[StreakDay]:
    """One entry per calendar day from start to end inclusive"""
    logged = set(log_dates)
    days = (end - start).days + 1
    return [
        StreakDay(date=start + timedelta(days=i), completed=(start + timedelta(days=i)) in logged)
        for i in range(max(days, 0))
    ]


def build_xp_trend(log_dates: Iterable[date], since: Optional[date] = None) -> List[XPPoint]:
    """Cumulative XP after each log; points before since still count toward the total"""
    points = []
    total = 0
    for log_date in sorted(log_dates):
        total += XP_PER_WORKOUT
        if since is None or log_date >= since:
            points.append(XPPoint(date=log_date, xp=total))
    return points


def _metric_from_row(row: Dict[str, Any]) -> BodyMetricResponse:
    return BodyMetricResponse(
        id=row["id"],
        user_id=row["user_id"],
        weight_lbs=row["weight"],
        body_fat_percentage=row.get("body_fat_percentage"),
        notes=row.get("notes"),
        date=row["recorded_at"],
        created_at=row.get("created_at"),
    )


class AnalyticsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _count(self, table: str, user_id: str, since: Optional[str] = None) -> int:
        query = self.supabase.table(table)\
            .select("id", count="exact")\
            .eq("user_id", user_id)
        if since:
            query = query.gte("date", since)
        return query.execute().count or 0

    def _log_dates(self, user_id: str, since: Optional[date] = None) -> List[date]:
        query = self.supabase.table("user_logs")\
            .select("date")\
            .eq("user_id", user_id)
        if since:
            query = query.gte("date", since.isoformat())
        result = query.order("date").execute()
        return [date.fromisoformat(str(row["date"])[:10]) for row in result.data]

    def get_dashboard(self, profile: dict) -> DashboardStats:
        try:
            user_id = profile["id"]
            xp = profile.get("xp") or 0
            return DashboardStats(
                total_workouts=self._count("user_logs", user_id),
                xp=xp,
                current_streak=profile.get("current_streak") or 0,
                tier=profile.get("tier"),
                rank=get_xp_breakdown(xp),
                workouts_this_week=self._count("user_logs", user_id, since=start_of_week(today()).isoformat()),
                badges_earned=self._count("user_badges", user_id),
            )
        except Exception as e:
            logger.error(f"Error building dashboard for {profile.get('id')}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_streak_history(self, user_id: str, days: int = 30) -> List[StreakDay]:
        try:
            end = today()
            start = end - timedelta(days=days - 1)
            return build_streak_history(self._log_dates(user_id, since=start), start, end)
        except Exception as e:
            logger.error(f"Error fetching streak history for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_xp_trend(self, user_id: str, days: Optional[int] = 30) -> List[XPPoint]:
        try:
            since = today() - timedelta(days=days - 1) if days else None
            return build_xp_trend(self._log_dates(user_id), since=since)
        except Exception as e:
            logger.error(f"Error fetching XP trend for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_body_metrics(self, user_id: str, limit: Optional[int] = None) -> List[BodyMetricResponse]:
        """Chronological body metrics; with limit, the most recent N"""
        try:
            query = self.supabase.table("body_metrics")\
                .select("*")\
                .eq("user_id", user_id)
            if limit:
                rows = list(reversed(query.order("recorded_at", desc=True).limit(limit).execute().data))
            else:
                rows = query.order("recorded_at").execute().data
            return [_metric_from_row(r) for r in rows]
        except Exception as e:
            logger.error(f"Error fetching body metrics for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def add_body_metric(self, user_id: str, metric: BodyMetricCreate) -> BodyMetricResponse:
        try:
            result = self.supabase.table("body_metrics").insert({
                "user_id": user_id,
                "weight": metric.weight_lbs,
                "body_fat_percentage": metric.body_fat_percentage,
                "notes": metric.notes,
                "recorded_at": (metric.date or today()).isoformat(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save body metric")

            return _metric_from_row(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving body metric for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_body_metric(self, user_id: str, metric_id: str) -> bool:
        try:
            result = self.supabase.table("body_metrics")\
                .delete()\
                .eq("id", metric_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Body metric not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting body metric {metric_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
