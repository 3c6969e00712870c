from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
import datetime as dt


class MissionComplete(BaseModel):
    workout_id: str
    duration: int = Field(..., ge=1, le=600)
    notes: Optional[str] = Field(None, max_length=500)
    date: Optional[dt.date] = None


class MissionUpdate(BaseModel):
    duration: Optional[int] = Field(None, ge=1, le=600)
    notes: Optional[str] = Field(None, max_length=500)


class MissionLogResponse(BaseModel):
    id: str
    user_id: str
    workout_id: str
    date: dt.date
    duration: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class MissionCompleteResponse(BaseModel):
    log: MissionLogResponse
    xp: int
    current_streak: int
    workout_count: int
    ranked_up: bool
    rank: Dict[str, Any]


class MissionStats(BaseModel):
    total_logs: int
    total_xp: int
    current_streak: int


class WeeklyCount(BaseModel):
    week: str
    count: int


class HasLoggedResponse(BaseModel):
    has_logged: bool
