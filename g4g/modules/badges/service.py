"""
Badge catalogue and read-side helpers.
Awarding happens in the database; detect_new_badges lets the client show a
toast for badges unlocked by the mission it just logged.
"""

import logging
from supabase import Client
from g4g.modules.badges.schemas import BadgeDefinition, BadgeStatus, EarnedBadge
from typing import Any, Dict, Iterable, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

BADGE_DEFINITIONS: List[BadgeDefinition] = [
    BadgeDefinition(name="First Blood", description="Complete your first workout",
                    icon="target", requirement_type="workouts", requirement_count=1),
    BadgeDefinition(name="Iron Week", description="Maintain a 7-day workout streak",
                    icon="flame", requirement_type="streak", requirement_count=7),
    BadgeDefinition(name="Double Digits", description="Complete 10 workouts",
                    icon="zap", requirement_type="workouts", requirement_count=10),
    BadgeDefinition(name="Quarter Century", description="Complete 25 workouts",
                    icon="medal", requirement_type="workouts", requirement_count=25),
    BadgeDefinition(name="Half Century", description="Complete 50 workouts",
                    icon="star", requirement_type="workouts", requirement_count=50),
    BadgeDefinition(name="Century", description="Complete 100 workouts",
                    icon="trophy", requirement_type="workouts", requirement_count=100),
    BadgeDefinition(name="Streak Master", description="Maintain a 30-day workout streak",
                    icon="flame", requirement_type="streak", requirement_count=30),
]


def detect_new_badges(
    previous_workout_count: int,
    previous_streak: int,
    profile: Dict[str, Any],
    earned_names: Iterable[str]
) -> List[BadgeDefinition]:
    """Badges whose threshold was crossed between the previous and current stats and not yet earned"""
    earned = set(earned_names)
    current = {
        "workouts": profile.get("workout_count") or 0,
        "streak": profile.get("current_streak") or 0,
    }
    previous = {
        "workouts": previous_workout_count,
        "streak": previous_streak,
    }
    new_badges = []
    for badge in BADGE_DEFINITIONS:
        if badge.name in earned:
            continue
        kind = badge.requirement_type
        if previous[kind] < badge.requirement_count <= current[kind]:
            new_badges.append(badge)
    return new_badges


class BadgeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_earned(self, user_id: str) -> List[EarnedBadge]:
        try:
            result = self.supabase.table("user_badges")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("earned_at", desc=True)\
                .execute()
            return [EarnedBadge(**b) for b in result.data]
        except Exception as e:
            logger.error(f"Error fetching badges for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_badge_status(self, user_id: str) -> List[BadgeStatus]:
        """Every badge, earned or locked"""
        earned = {b.badge_name: b for b in self.list_earned(user_id)}
        return [
            BadgeStatus(
                **badge.model_dump(),
                earned=badge.name in earned,
                earned_at=earned[badge.name].earned_at if badge.name in earned else None,
            )
            for badge in BADGE_DEFINITIONS
        ]

    def detect(self, profile: dict, previous_workout_count: int, previous_streak: int) -> List[BadgeDefinition]:
        earned = [b.badge_name for b in self.list_earned(profile["id"])]
        new_badges = detect_new_badges(previous_workout_count, previous_streak, profile, earned)
        if new_badges:
            logger.info(f"User {profile['id']} unlocked {[b.name for b in new_badges]}")
        return new_badges
