import logging
import math
from supabase import Client
from g4g.modules.coaches.schemas import CoachDirectoryEntry, CoachProfileUpdate
from g4g.core.dates import utcnow_iso
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8
DIRECTORY_COLUMNS = (
    "id, email, bio, specialties, certifications, years_experience, "
    "avatar_url, location, latitude, longitude"
)


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in miles"""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = math.sin(d_lat / 2) ** 2 + \
        math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def split_specialties(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [s.strip() for s in value.split(",") if s.strip()]


def to_directory_entry(row: dict) -> CoachDirectoryEntry:
    # Coaches are listed under the local part of their email
    return CoachDirectoryEntry(
        id=row["id"],
        display_name=(row.get("email") or "").split("@")[0],
        bio=row.get("bio"),
        specialties=split_specialties(row.get("specialties")),
        certifications=row.get("certifications"),
        years_experience=row.get("years_experience"),
        avatar_url=row.get("avatar_url"),
        location=row.get("location"),
        latitude=row.get("latitude"),
        longitude=row.get("longitude"),
    )


class CoachService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _public_coaches(self) -> List[CoachDirectoryEntry]:
        result = self.supabase.table("profiles")\
            .select(DIRECTORY_COLUMNS)\
            .eq("role", "coach")\
            .eq("is_public", True)\
            .order("email")\
            .execute()
        return [to_directory_entry(row) for row in result.data]

    def list_directory(
        self,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius_miles: float = 50,
        search: Optional[str] = None,
        specialty: Optional[str] = None
    ) -> List[CoachDirectoryEntry]:
        """
        Public coaches, optionally narrowed by name and specialty.
        With a location, only coaches that have coordinates within radius_miles
        are returned, nearest first.
        """
        if (lat is None) != (lng is None):
            raise HTTPException(
                status_code=400,
                detail="Both lat and lng are required when filtering by location"
            )
        try:
            coaches = self._public_coaches()
        except Exception as e:
            logger.error(f"Error fetching coach directory: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if search and search.strip():
            needle = search.strip().lower()
            coaches = [c for c in coaches if needle in c.display_name.lower()]
        if specialty and specialty.strip():
            wanted = specialty.strip().lower()
            coaches = [c for c in coaches if any(wanted in s.lower() for s in c.specialties)]

        if lat is None:
            return coaches

        nearby = []
        for coach in coaches:
            if coach.latitude is None or coach.longitude is None:
                continue
            coach.distance_miles = round(haversine_miles(lat, lng, coach.latitude, coach.longitude), 1)
            if coach.distance_miles <= radius_miles:
                nearby.append(coach)
        return sorted(nearby, key=lambda c: c.distance_miles)

    def list_specialties(self) -> List[str]:
        """Distinct specialties across public coaches, for the filter dropdown"""
        try:
            coaches = self._public_coaches()
        except Exception as e:
            logger.error(f"Error fetching coach specialties: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return sorted({s for c in coaches for s in c.specialties}, key=lambda s: (s.lower(), s))

    def get_public_coach(self, coach_id: str) -> CoachDirectoryEntry:
        try:
            result = self.supabase.table("profiles")\
                .select(DIRECTORY_COLUMNS)\
                .eq("id", coach_id)\
                .eq("role", "coach")\
                .eq("is_public", True)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Coach not found")
            return to_directory_entry(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching coach {coach_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_directory_profile(self, profile: dict, update: CoachProfileUpdate) -> CoachDirectoryEntry:
        """Coaches edit their own directory listing"""
        if profile.get("role") != "coach":
            raise HTTPException(status_code=403, detail="Only coaches have a directory listing")
        try:
            update_data = update.model_dump(exclude_unset=True)
            update_data["updated_at"] = utcnow_iso()
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", profile["id"])\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            logger.info(f"Directory listing updated for coach {profile['id']}")
            return to_directory_entry(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating directory listing for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
