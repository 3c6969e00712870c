from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal, Dict, Any
from datetime import date, datetime

Role = Literal["admin", "coach", "soldier", "user"]
FitnessExperience = Literal["beginner", "intermediate", "advanced", "athlete"]
FitnessGoal = Literal["lose_fat", "build_muscle", "get_stronger", "improve_endurance", "general_fitness"]
Gender = Literal["male", "female", "other", "prefer_not_to_say"]


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    role: str = "user"
    tier: Optional[str] = None
    xp: int = 0
    current_streak: int = 0
    workout_count: int = 0
    coach_id: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    last_active: Optional[datetime] = None
    onboarding_completed: bool = False
    dossier_complete: bool = False
    banned: bool = False
    fitness_experience: Optional[str] = None
    fitness_goal: Optional[str] = None
    available_equipment: Optional[List[str]] = None
    injuries_limitations: Optional[str] = None
    preferred_duration: Optional[int] = None
    workout_days_per_week: Optional[int] = None
    height_inches: Optional[int] = None
    target_weight: Optional[float] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileMeResponse(ProfileResponse):
    rank: Dict[str, Any]
    has_premium: bool


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    avatar_url: Optional[str] = None

    @field_validator("full_name", "bio")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class DossierUpdate(BaseModel):
    fitness_experience: Optional[FitnessExperience] = None
    fitness_goal: Optional[FitnessGoal] = None
    available_equipment: Optional[List[str]] = None
    injuries_limitations: Optional[str] = Field(None, max_length=1000)
    preferred_duration: Optional[int] = Field(None, ge=5, le=240)
    workout_days_per_week: Optional[int] = Field(None, ge=1, le=7)
    height_feet: Optional[int] = Field(None, ge=3, le=8)
    height_inches: Optional[int] = Field(None, ge=0, le=11)
    target_weight: Optional[float] = Field(None, gt=0, le=1000)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None

    def total_height_inches(self) -> Optional[int]:
        if self.height_feet is None:
            return None
        return self.height_feet * 12 + (self.height_inches or 0)


class RosterResponse(BaseModel):
    data: List[ProfileResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class RoleUpdate(BaseModel):
    role: Role


class CoachAssign(BaseModel):
    coach_id: Optional[str] = None


class BanUpdate(BaseModel):
    banned: bool
