import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any


class DashboardStats(BaseModel):
    total_workouts: int
    xp: int
    current_streak: int
    tier: Optional[str] = None
    rank: Dict[str, Any]
    workouts_this_week: int
    badges_earned: int


class StreakDay(BaseModel):
    date: dt.date
    completed: bool


class XPPoint(BaseModel):
    date: dt.date
    xp: int


class BodyMetricCreate(BaseModel):
    weight_lbs: float = Field(..., ge=50, le=500)
    body_fat_percentage: Optional[float] = Field(None, ge=3, le=60)
    date: Optional[dt.date] = None
    notes: Optional[str] = Field(None, max_length=200)

    @field_validator("date")
    @classmethod
    def not_in_future(cls, v: Optional[dt.date]) -> Optional[dt.date]:
        if v is not None and v > dt.date.today():
            raise ValueError("Date cannot be in the future")
        return v


class BodyMetricResponse(BaseModel):
    id: str
    user_id: str
    weight_lbs: float
    body_fat_percentage: Optional[float] = None
    notes: Optional[str] = None
    date: dt.date
    created_at: Optional[dt.datetime] = None
