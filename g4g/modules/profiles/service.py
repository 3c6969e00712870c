import logging
import math
from supabase import Client
from g4g.modules.profiles.schemas import (
    ProfileResponse, ProfileMeResponse, ProfileUpdate, DossierUpdate, RosterResponse
)
from g4g.core.ranks import get_xp_breakdown
from g4g.core.dates import utcnow_iso
from g4g.core.tiers import has_premium_access, STAFF_ROLES
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_me(self, profile: dict) -> ProfileMeResponse:
        """Profile with rank progression and premium flag"""
        return ProfileMeResponse(
            **profile,
            rank=get_xp_breakdown(profile.get("xp") or 0),
            has_premium=has_premium_access(profile),
        )

    def _update(self, user_id: str, update_data: dict) -> ProfileResponse:
        update_data["updated_at"] = utcnow_iso()
        result = self.supabase.table("profiles")\
            .update(update_data)\
            .eq("id", user_id)\
            .execute()

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")

        return ProfileResponse(**result.data[0])

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update basic profile fields"""
        try:
            return self._update(user_id, profile_data.model_dump(exclude_none=True))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_dossier(self, user_id: str, dossier: DossierUpdate) -> ProfileResponse:
        """Save the fitness dossier; every dossier field is written, blanks become null"""
        try:
            update_data = dossier.model_dump(exclude={"height_feet", "height_inches"})
            if update_data.get("date_of_birth") is not None:
                update_data["date_of_birth"] = update_data["date_of_birth"].isoformat()
            if not update_data.get("available_equipment"):
                update_data["available_equipment"] = None
            update_data["height_inches"] = dossier.total_height_inches()
            update_data["dossier_complete"] = True
            profile = self._update(user_id, update_data)
            logger.info(f"Dossier completed for {user_id}")
            return profile
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving dossier for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_roster(
        self,
        coach_id: str,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None
    ) -> RosterResponse:
        """Trainees assigned to a coach, paginated and ordered by email"""
        try:
            offset = (page - 1) * page_size

            count_query = self.supabase.table("profiles")\
                .select("id", count="exact")\
                .eq("coach_id", coach_id)
            if search and search.strip():
                count_query = count_query.ilike("email", f"%{search.strip()}%")
            total = count_query.execute().count or 0

            query = self.supabase.table("profiles")\
                .select("*")\
                .eq("coach_id", coach_id)
            if search and search.strip():
                query = query.ilike("email", f"%{search.strip()}%")
            result = query.order("email")\
                .range(offset, offset + page_size - 1)\
                .execute()

            return RosterResponse(
                data=[ProfileResponse(**p) for p in result.data],
                total=total,
                page=page,
                page_size=page_size,
                total_pages=math.ceil(total / page_size) if page_size else 0,
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing roster for coach {coach_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def set_role(self, user_id: str, role: str) -> ProfileResponse:
        try:
            profile = self._update(user_id, {"role": role})
            logger.info(f"Role for {user_id} set to {role}")
            return profile
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error setting role for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def set_banned(self, user_id: str, banned: bool, admin_id: str) -> ProfileResponse:
        """Suspend or reinstate an account"""
        try:
            if banned and user_id == admin_id:
                raise HTTPException(status_code=400, detail="Admins cannot ban themselves")
            profile = self._update(user_id, {"banned": banned})
            logger.info(f"User {user_id} {'banned' if banned else 'unbanned'} by {admin_id}")
            return profile
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating ban status for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def assign_coach(self, user_id: str, coach_id: Optional[str]) -> ProfileResponse:
        """Assign (or clear, with None) the trainee's coach"""
        try:
            if coach_id is not None:
                coach = self.get_profile(coach_id)
                if coach.role not in STAFF_ROLES:
                    raise HTTPException(status_code=400, detail="Assigned user is not a coach")
                if coach_id == user_id:
                    raise HTTPException(status_code=400, detail="A user cannot coach themselves")
            profile = self._update(user_id, {"coach_id": coach_id})
            logger.info(f"Coach for {user_id} set to {coach_id}")
            return profile
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error assigning coach for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
