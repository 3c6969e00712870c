from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class BriefingCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)
    activate: bool = True

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Briefing cannot be empty")
        return v


class BriefingUpdate(BaseModel):
    content: Optional[str] = Field(None, min_length=1, max_length=1000)
    active: Optional[bool] = None


class BriefingResponse(BaseModel):
    id: str
    content: str
    active: bool = False
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
