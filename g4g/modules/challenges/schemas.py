from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime


class ChallengeResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    challenge_type: Optional[str] = None
    goal_value: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = "active"
    created_at: Optional[datetime] = None
    participants_count: int = 0

    class Config:
        from_attributes = True


class ParticipationResponse(BaseModel):
    id: str
    challenge_id: str
    user_id: str
    progress: int = 0
    completed: bool = False
    joined_at: Optional[datetime] = None
    challenge: Optional[ChallengeResponse] = None


class ChallengeLeaderboardEntry(BaseModel):
    position: int
    user_id: str
    email: Optional[str] = None
    tier: Optional[str] = None
    xp: int = 0
    progress: int = 0
    completed: bool = False


class ChallengeLeaderboard(BaseModel):
    challenge_id: str
    entries: List[ChallengeLeaderboardEntry]
