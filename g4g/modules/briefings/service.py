import logging
from supabase import Client
from g4g.modules.briefings.schemas import BriefingCreate, BriefingUpdate, BriefingResponse
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class BriefingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_active(self) -> Optional[BriefingResponse]:
        try:
            result = self.supabase.table("daily_briefings")\
                .select("*")\
                .eq("active", True)\
                .order("created_at", desc=True)\
                .limit(1)\
                .execute()
            return BriefingResponse(**result.data[0]) if result.data else None
        except Exception as e:
            logger.error(f"Error fetching active briefing: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_briefings(self) -> List[BriefingResponse]:
        try:
            result = self.supabase.table("daily_briefings")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [BriefingResponse(**b) for b in result.data]
        except Exception as e:
            logger.error(f"Error listing briefings: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _deactivate_all(self, except_id: Optional[str] = None):
        query = self.supabase.table("daily_briefings")\
            .update({"active": False})\
            .eq("active", True)
        if except_id:
            query = query.neq("id", except_id)
        query.execute()

    def create_briefing(self, briefing: BriefingCreate, user_id: str) -> BriefingResponse:
        """Create a briefing; an activated one replaces the current active briefing"""
        try:
            if briefing.activate:
                self._deactivate_all()

            result = self.supabase.table("daily_briefings").insert({
                "content": briefing.content,
                "active": briefing.activate,
                "created_by": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create briefing")

            logger.info(f"Briefing {result.data[0]['id']} created (active={briefing.activate})")
            return BriefingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating briefing: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_briefing(self, briefing_id: str, briefing: BriefingUpdate) -> BriefingResponse:
        """Edit a briefing; the row must exist before any other briefing is switched off"""
        try:
            existing = self.supabase.table("daily_briefings")\
                .select("*")\
                .eq("id", briefing_id)\
                .limit(1)\
                .execute()
            if not existing.data:
                raise HTTPException(status_code=404, detail="Briefing not found")

            update_data = briefing.model_dump(exclude_unset=True, exclude_none=True)
            if not update_data:
                return BriefingResponse(**existing.data[0])

            if update_data.get("active"):
                self._deactivate_all(except_id=briefing_id)

            result = self.supabase.table("daily_briefings")\
                .update(update_data)\
                .eq("id", briefing_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Briefing not found")

            return BriefingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating briefing {briefing_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_briefing(self, briefing_id: str) -> bool:
        try:
            result = self.supabase.table("daily_briefings")\
                .delete()\
                .eq("id", briefing_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Briefing not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting briefing {briefing_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
