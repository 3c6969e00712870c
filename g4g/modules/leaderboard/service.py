import logging
from supabase import Client
from g4g.modules.leaderboard.schemas import LeaderboardEntry, LeaderboardResponse, MyPosition
from g4g.core.ranks import calculate_rank
from g4g.config import settings
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

LEADERBOARD_COLUMNS = "id, email, full_name, avatar_url, tier, xp, current_streak, workout_count"


class LeaderboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_top(self, tier: Optional[str] = None, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        """Top profiles by XP; equal XP shares a position (1, 1, 3)"""
        query = self.supabase.table("profiles").select(LEADERBOARD_COLUMNS)
        if tier:
            query = query.eq("tier", tier)
        result = query.order("xp", desc=True)\
            .limit(limit or settings.leaderboard_limit)\
            .execute()
        entries = []
        position = 0
        previous_xp = None
        for i, row in enumerate(result.data):
            xp = row.get("xp") or 0
            if xp != previous_xp:
                position = i + 1
                previous_xp = xp
            entries.append(LeaderboardEntry(
                **{k: v for k, v in row.items() if v is not None},
                position=position,
                rank=calculate_rank(xp),
            ))
        return entries

    def get_position(self, profile: dict, tier: Optional[str] = None) -> int:
        """1 + number of profiles with strictly more XP"""
        query = self.supabase.table("profiles")\
            .select("id", count="exact")\
            .gt("xp", profile.get("xp") or 0)
        if tier:
            query = query.eq("tier", tier)
        return (query.execute().count or 0) + 1

    def get_leaderboard(self, profile: dict, tier: Optional[str] = None) -> LeaderboardResponse:
        try:
            entries = self.get_top(tier)
            xp = profile.get("xp") or 0
            me = MyPosition(
                position=self.get_position(profile, tier),
                xp=xp,
                rank=calculate_rank(xp),
                in_top=any(e.id == profile["id"] for e in entries),
            )
            return LeaderboardResponse(tier=tier, entries=entries, me=me)
        except Exception as e:
            logger.error(f"Error building leaderboard: {e}")
            raise HTTPException(status_code=500, detail=str(e))
