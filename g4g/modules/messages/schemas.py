from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


class MessageSend(BaseModel):
    receiver_id: str
    content: str = Field(..., min_length=1, max_length=1000)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v):
        # length limits apply to the trimmed text
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Message cannot be empty")
        return v


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    is_read: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    partner_id: str
    messages: List[MessageResponse]
    poll_interval_seconds: int


class ConversationSummary(BaseModel):
    user_id: str
    user_email: Optional[str] = None
    user_avatar: Optional[str] = None
    last_message: str
    last_message_at: Optional[datetime] = None
    unread: bool = False


class UnreadCount(BaseModel):
    count: int


class MarkedRead(BaseModel):
    updated: int
