from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


class BadgeDefinition(BaseModel):
    name: str
    description: str
    icon: str
    requirement_type: Literal["workouts", "streak"]
    requirement_count: int


class BadgeStatus(BadgeDefinition):
    earned: bool = False
    earned_at: Optional[datetime] = None


class EarnedBadge(BaseModel):
    id: str
    user_id: str
    badge_name: str
    earned_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BadgeDetectRequest(BaseModel):
    previous_workout_count: int = Field(..., ge=0)
    previous_streak: int = Field(..., ge=0)
