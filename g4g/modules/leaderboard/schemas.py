from pydantic import BaseModel
from typing import Optional, List


class LeaderboardEntry(BaseModel):
    position: int
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    tier: Optional[str] = None
    xp: int = 0
    current_streak: int = 0
    workout_count: int = 0
    rank: str


class MyPosition(BaseModel):
    position: int
    xp: int
    rank: str
    in_top: bool


class LeaderboardResponse(BaseModel):
    tier: Optional[str] = None
    entries: List[LeaderboardEntry]
    me: MyPosition
