from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


def _strip_required(v, label: str):
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError(f"{label} cannot be empty")
    return v


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    image_url: Optional[str] = Field(None, max_length=500)
    workout_id: Optional[str] = None
    user_log_id: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v):
        return _strip_required(v, "Post")

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("image_url must be an http(s) URL")
        return v


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=500)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v):
        return _strip_required(v, "Comment")


class PostAuthor(BaseModel):
    id: str
    email: Optional[str] = None
    tier: Optional[str] = None
    xp: int = 0
    current_streak: int = 0


class PostWorkout(BaseModel):
    id: str
    title: str


class PostResponse(BaseModel):
    id: str
    user_id: str
    content: str
    image_url: Optional[str] = None
    workout_id: Optional[str] = None
    user_log_id: Optional[str] = None
    created_at: Optional[datetime] = None
    author: Optional[PostAuthor] = None
    workout: Optional[PostWorkout] = None
    likes_count: int = 0
    comments_count: int = 0
    has_liked: bool = False

    class Config:
        from_attributes = True


class CommentResponse(BaseModel):
    id: str
    post_id: str
    user_id: str
    content: str
    created_at: Optional[datetime] = None
    author: Optional[PostAuthor] = None

    class Config:
        from_attributes = True


class LikeResponse(BaseModel):
    post_id: str
    liked: bool
    likes_count: int
