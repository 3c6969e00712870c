import logging
from datetime import datetime, timedelta, timezone
from supabase import Client
from g4g.modules.buddies.schemas import (
    BuddyRequestCreate, BuddyRequestResponse, BuddyResponse, BuddyProfile, NudgeResponse
)
from g4g.core.dates import parse_timestamp
from g4g.config import settings
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

PROFILE_SUMMARY_COLUMNS = "id, email, full_name, avatar_url, tier, xp, current_streak, last_active"
NUDGE_COOLDOWN_HOURS = 24


def is_buddy_inactive(last_active, hours: int, now: Optional[datetime] = None) -> bool:
    """A buddy with no recorded activity, or none in the last `hours`, is inactive"""
    if not last_active:
        return True
    now = now or datetime.now(timezone.utc)
    return now - parse_timestamp(last_active) > timedelta(hours=hours)


def _pair_filter(user_id: str, other_id: str) -> str:
    return (
        f"and(user_id.eq.{user_id},buddy_id.eq.{other_id}),"
        f"and(user_id.eq.{other_id},buddy_id.eq.{user_id})"
    )


class BuddyService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _profiles_by_id(self, user_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        if not user_ids:
            return {}
        result = self.supabase.table("profiles")\
            .select(PROFILE_SUMMARY_COLUMNS)\
            .in_("id", list(set(user_ids)))\
            .execute()
        return {p["id"]: p for p in result.data}

    def send_request(self, user_id: str, request: BuddyRequestCreate) -> BuddyRequestResponse:
        try:
            target = self.supabase.table("profiles")\
                .select("id")\
                .eq("email", request.buddy_email)\
                .limit(1)\
                .execute()
            if not target.data:
                raise HTTPException(status_code=404, detail="User not found")

            buddy_id = target.data[0]["id"]
            if buddy_id == user_id:
                raise HTTPException(status_code=400, detail="Cannot add yourself as a buddy")

            existing = self.supabase.table("buddies")\
                .select("id")\
                .or_(_pair_filter(user_id, buddy_id))\
                .limit(1)\
                .execute()
            if existing.data:
                raise HTTPException(
                    status_code=400,
                    detail="Buddy request already exists or you're already buddies"
                )

            result = self.supabase.table("buddies").insert({
                "user_id": user_id,
                "buddy_id": buddy_id,
                "status": "pending",
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send buddy request")

            logger.info(f"Buddy request {user_id} -> {buddy_id}")
            return BuddyRequestResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error sending buddy request from {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def accept_request(self, user_id: str, request_id: str) -> BuddyRequestResponse:
        """Only the addressee accepts; the mirror row makes the friendship visible both ways"""
        try:
            result = self.supabase.table("buddies")\
                .update({"status": "accepted"})\
                .eq("id", request_id)\
                .eq("buddy_id", user_id)\
                .eq("status", "pending")\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Pending buddy request not found")

            request = result.data[0]
            self.supabase.table("buddies")\
                .upsert({
                    "user_id": user_id,
                    "buddy_id": request["user_id"],
                    "status": "accepted",
                }, on_conflict="user_id,buddy_id")\
                .execute()

            logger.info(f"Buddy request {request_id} accepted by {user_id}")
            return BuddyRequestResponse(**request)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error accepting buddy request {request_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def reject_request(self, user_id: str, request_id: str) -> bool:
        """Reject an incoming request or cancel an outgoing one"""
        try:
            result = self.supabase.table("buddies")\
                .delete()\
                .eq("id", request_id)\
                .eq("status", "pending")\
                .or_(f"user_id.eq.{user_id},buddy_id.eq.{user_id}")\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Pending buddy request not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error rejecting buddy request {request_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def remove_buddy(self, user_id: str, other_id: str) -> bool:
        """Delete the friendship in both directions"""
        try:
            result = self.supabase.table("buddies")\
                .delete()\
                .or_(_pair_filter(user_id, other_id))\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Buddy not found")

            logger.info(f"Buddies {user_id} and {other_id} removed")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error removing buddy {other_id} for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_buddies(self, user_id: str) -> List[BuddyResponse]:
        try:
            result = self.supabase.table("buddies")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("status", "accepted")\
                .order("created_at", desc=True)\
                .execute()

            profiles = self._profiles_by_id([row["buddy_id"] for row in result.data])
            buddies = []
            for row in result.data:
                profile = profiles.get(row["buddy_id"])
                buddies.append(BuddyResponse(
                    **row,
                    profile=BuddyProfile(**profile) if profile else None,
                    inactive=is_buddy_inactive(
                        profile.get("last_active") if profile else None,
                        settings.buddy_inactive_hours
                    ),
                ))
            return buddies
        except Exception as e:
            logger.error(f"Error listing buddies for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _list_pending(self, column: str, user_id: str, other_column: str) -> List[BuddyRequestResponse]:
        result = self.supabase.table("buddies")\
            .select("*")\
            .eq(column, user_id)\
            .eq("status", "pending")\
            .order("created_at", desc=True)\
            .execute()
        profiles = self._profiles_by_id([row[other_column] for row in result.data])
        return [
            BuddyRequestResponse(
                **row,
                profile=BuddyProfile(**profiles[row[other_column]]) if row[other_column] in profiles else None
            )
            for row in result.data
        ]

    def list_incoming(self, user_id: str) -> List[BuddyRequestResponse]:
        """Pending requests addressed to the user, with the requester's profile"""
        try:
            return self._list_pending("buddy_id", user_id, "user_id")
        except Exception as e:
            logger.error(f"Error listing incoming buddy requests for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_outgoing(self, user_id: str) -> List[BuddyRequestResponse]:
        try:
            return self._list_pending("user_id", user_id, "buddy_id")
        except Exception as e:
            logger.error(f"Error listing outgoing buddy requests for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def count_buddies(self, user_id: str) -> int:
        try:
            result = self.supabase.table("buddies")\
                .select("id", count="exact")\
                .eq("user_id", user_id)\
                .eq("status", "accepted")\
                .execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting buddies for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def are_buddies(self, user_id: str, other_id: str) -> bool:
        result = self.supabase.table("buddies")\
            .select("id")\
            .or_(_pair_filter(user_id, other_id))\
            .eq("status", "accepted")\
            .limit(1)\
            .execute()
        return bool(result.data)

    def nudge(self, sender: dict, other_id: str) -> NudgeResponse:
        """
        Nudge an inactive buddy. Each buddy can be nudged by the same sender
        once per NUDGE_COOLDOWN_HOURS.
        """
        try:
            if not self.are_buddies(sender["id"], other_id):
                raise HTTPException(status_code=403, detail="You can only nudge your buddies")

            profile = self._profiles_by_id([other_id]).get(other_id)
            if not profile:
                raise HTTPException(status_code=404, detail="Buddy not found")
            if not is_buddy_inactive(profile.get("last_active"), settings.buddy_inactive_hours):
                raise HTTPException(status_code=400, detail="Buddy has been active recently")

            cutoff = datetime.now(timezone.utc) - timedelta(hours=NUDGE_COOLDOWN_HOURS)
            recent = self.supabase.table("notifications")\
                .select("id")\
                .eq("user_id", other_id)\
                .eq("sender_id", sender["id"])\
                .eq("type", "buddy_nudge")\
                .gte("created_at", cutoff.isoformat())\
                .limit(1)\
                .execute()
            if recent.data:
                raise HTTPException(status_code=400, detail="Buddy was already nudged in the last 24 hours")

            sender_name = sender.get("full_name") or sender.get("email") or "Your buddy"
            result = self.supabase.table("notifications").insert({
                "user_id": other_id,
                "sender_id": sender["id"],
                "type": "buddy_nudge",
                "title": "Your buddy is waiting",
                "message": f"{sender_name} nudged you. Time to get back to training!",
                "is_read": False,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send nudge")

            logger.info(f"{sender['id']} nudged buddy {other_id}")
            return NudgeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error nudging buddy {other_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
