import logging
from collections import Counter
from supabase import Client
from g4g.modules.challenges.schemas import (
    ChallengeResponse, ParticipationResponse, ChallengeLeaderboard, ChallengeLeaderboardEntry
)
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

CHALLENGE_LEADERBOARD_SIZE = 50


class ChallengeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_active(self) -> List[ChallengeResponse]:
        """Active challenges by start date with participant counts"""
        try:
            result = self.supabase.table("challenges")\
                .select("*")\
                .eq("status", "active")\
                .order("start_date")\
                .execute()
            challenges = result.data
            if not challenges:
                return []

            participants = self.supabase.table("challenge_participants")\
                .select("challenge_id")\
                .in_("challenge_id", [c["id"] for c in challenges])\
                .execute()
            counts = Counter(p["challenge_id"] for p in participants.data)

            return [ChallengeResponse(**c, participants_count=counts.get(c["id"], 0)) for c in challenges]
        except Exception as e:
            logger.error(f"Error listing challenges: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def join(self, user_id: str, challenge_id: str) -> ParticipationResponse:
        try:
            challenge = self.supabase.table("challenges")\
                .select("*")\
                .eq("id", challenge_id)\
                .eq("status", "active")\
                .limit(1)\
                .execute()
            if not challenge.data:
                raise HTTPException(status_code=404, detail="Active challenge not found")

            existing = self.supabase.table("challenge_participants")\
                .select("id")\
                .eq("challenge_id", challenge_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=400, detail="Already joined this challenge")

            result = self.supabase.table("challenge_participants").insert({
                "challenge_id": challenge_id,
                "user_id": user_id,
                "progress": 0,
                "completed": False,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to join challenge")

            logger.info(f"User {user_id} joined challenge {challenge_id}")
            return ParticipationResponse(
                **result.data[0],
                challenge=ChallengeResponse(**challenge.data[0])
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error joining challenge {challenge_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def leave(self, user_id: str, challenge_id: str) -> bool:
        try:
            result = self.supabase.table("challenge_participants")\
                .delete()\
                .eq("challenge_id", challenge_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Not a participant of this challenge")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error leaving challenge {challenge_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_mine(self, user_id: str) -> List[ParticipationResponse]:
        """The user's participations, most recently joined first"""
        try:
            result = self.supabase.table("challenge_participants")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("joined_at", desc=True)\
                .execute()
            if not result.data:
                return []

            challenges = self.supabase.table("challenges")\
                .select("*")\
                .in_("id", list({p["challenge_id"] for p in result.data}))\
                .execute()
            by_id = {c["id"]: ChallengeResponse(**c) for c in challenges.data}

            return [
                ParticipationResponse(**p, challenge=by_id.get(p["challenge_id"]))
                for p in result.data
            ]
        except Exception as e:
            logger.error(f"Error listing challenges for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_leaderboard(self, challenge_id: str) -> ChallengeLeaderboard:
        try:
            result = self.supabase.table("challenge_participants")\
                .select("*")\
                .eq("challenge_id", challenge_id)\
                .order("progress", desc=True)\
                .limit(CHALLENGE_LEADERBOARD_SIZE)\
                .execute()

            profiles = {}
            if result.data:
                rows = self.supabase.table("profiles")\
                    .select("id, email, tier, xp")\
                    .in_("id", [p["user_id"] for p in result.data])\
                    .execute()
                profiles = {p["id"]: p for p in rows.data}

            entries = []
            for i, participant in enumerate(result.data):
                user = profiles.get(participant["user_id"], {})
                entries.append(ChallengeLeaderboardEntry(
                    position=i + 1,
                    user_id=participant["user_id"],
                    email=user.get("email"),
                    tier=user.get("tier"),
                    xp=user.get("xp") or 0,
                    progress=participant.get("progress") or 0,
                    completed=bool(participant.get("completed")),
                ))
            return ChallengeLeaderboard(challenge_id=challenge_id, entries=entries)
        except Exception as e:
            logger.error(f"Error fetching leaderboard for challenge {challenge_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
