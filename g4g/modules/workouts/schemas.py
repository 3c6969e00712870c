import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import date, datetime

Tier = Literal[".223", ".556", ".762", ".50 Cal"]

YOUTUBE_URL = re.compile(r"^https://(www\.)?(youtube\.com|youtu\.be)/")


class SetRep(BaseModel):
    exercise: str = Field(..., min_length=1)
    reps: str = Field(..., min_length=1)

    @field_validator("exercise", "reps")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


def _check_video_url(v: Optional[str]) -> Optional[str]:
    if v and not YOUTUBE_URL.match(v):
        raise ValueError("Must be a YouTube URL")
    return v or None


class WorkoutCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    tier: Tier
    video_url: Optional[str] = None
    scheduled_date: date
    sets_reps: List[SetRep] = Field(..., min_length=1, max_length=20)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("video_url")
    @classmethod
    def youtube_only(cls, v):
        return _check_video_url(v)


class WorkoutUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    tier: Optional[Tier] = None
    video_url: Optional[str] = None
    scheduled_date: Optional[date] = None
    sets_reps: Optional[List[SetRep]] = Field(None, min_length=1, max_length=20)

    @field_validator("video_url")
    @classmethod
    def youtube_only(cls, v):
        return _check_video_url(v)


class WorkoutResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    tier: str
    video_url: Optional[str] = None
    scheduled_date: date
    sets_reps: List[SetRep] = []
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LibraryWorkout(WorkoutResponse):
    locked: bool = False
