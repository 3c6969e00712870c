from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class ZeroDayTestSubmit(BaseModel):
    pushups: int = Field(..., ge=0, le=1000)
    squats: int = Field(..., ge=0, le=1000)
    plank_seconds: int = Field(..., ge=0, le=36000)


class ZeroDayTestResponse(BaseModel):
    id: str
    user_id: str
    pushups: int
    squats: int
    plank_seconds: int
    assigned_tier: str
    previous_tier: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ZeroDayResult(BaseModel):
    assigned_tier: str
    previous_tier: Optional[str] = None
    tier_changed: bool
    tier_info: Dict[str, Any]
    pushups: int
    squats: int
    plank_seconds: int
