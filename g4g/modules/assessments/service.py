import logging
from supabase import Client
from g4g.modules.assessments.schemas import ZeroDayTestSubmit, ZeroDayTestResponse, ZeroDayResult
from g4g.core.tiers import assign_tier, get_tier_info
from g4g.core.dates import utcnow_iso
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class AssessmentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit_zero_day(self, profile: dict, test: ZeroDayTestSubmit) -> ZeroDayResult:
        """Score a Zero Day test, record the attempt and write the tier to the profile"""
        user_id = profile["id"]
        previous_tier = profile.get("tier")
        new_tier = assign_tier(test.pushups)

        # History is best-effort; the tier update is what matters
        try:
            self.supabase.table("zero_day_tests").insert({
                "user_id": user_id,
                "pushups": test.pushups,
                "squats": test.squats,
                "plank_seconds": test.plank_seconds,
                "assigned_tier": new_tier,
                "previous_tier": previous_tier,
            }).execute()
        except Exception as e:
            logger.error(f"Failed to save Zero Day test for {user_id}: {e}")

        try:
            result = self.supabase.table("profiles")\
                .update({
                    "tier": new_tier,
                    "onboarding_completed": True,
                    "updated_at": utcnow_iso(),
                })\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to update tier for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update tier: {e}")

        logger.info(f"Zero Day for {user_id}: {test.pushups} pushups -> {new_tier} (was {previous_tier})")
        return ZeroDayResult(
            assigned_tier=new_tier,
            previous_tier=previous_tier,
            tier_changed=previous_tier != new_tier,
            tier_info=get_tier_info(new_tier),
            pushups=test.pushups,
            squats=test.squats,
            plank_seconds=test.plank_seconds,
        )

    def get_latest(self, user_id: str) -> Optional[ZeroDayTestResponse]:
        try:
            result = self.supabase.table("zero_day_tests")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return ZeroDayTestResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error fetching latest Zero Day test for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_history(self, user_id: str, limit: int = 20, offset: int = 0) -> List[ZeroDayTestResponse]:
        try:
            result = self.supabase.table("zero_day_tests")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [ZeroDayTestResponse(**t) for t in result.data]
        except Exception as e:
            logger.error(f"Error fetching Zero Day history for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
