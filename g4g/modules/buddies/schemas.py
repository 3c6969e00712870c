from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime


class BuddyRequestCreate(BaseModel):
    buddy_email: EmailStr

    @field_validator("buddy_email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class BuddyProfile(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    tier: Optional[str] = None
    xp: int = 0
    current_streak: int = 0
    last_active: Optional[datetime] = None


class BuddyRequestResponse(BaseModel):
    id: str
    user_id: str
    buddy_id: str
    status: str
    created_at: Optional[datetime] = None
    profile: Optional[BuddyProfile] = None

    class Config:
        from_attributes = True


class BuddyResponse(BuddyRequestResponse):
    inactive: bool = False


class BuddyCount(BaseModel):
    count: int


class NudgeResponse(BaseModel):
    id: str
    user_id: str
    sender_id: Optional[str] = None
    type: str
    title: str
    message: str
    created_at: Optional[datetime] = None
