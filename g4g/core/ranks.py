"""
Rank progression derived from profile XP.
XP itself is maintained by database triggers on user_logs; these helpers only read it.
"""

import math
from typing import Any, Dict, List, Optional

XP_PER_WORKOUT = 100

RANKS: List[Dict[str, Any]] = [
    {
        "name": "Recruit",
        "min_xp": 0,
        "max_xp": 999,
        "description": "Just starting your journey. Every mission counts.",
    },
    {
        "name": "Soldier",
        "min_xp": 1000,
        "max_xp": 4999,
        "description": "Proven warrior. You've earned your stripes.",
    },
    {
        "name": "Commander",
        "min_xp": 5000,
        "max_xp": None,  # open-ended
        "description": "Elite operator. You lead by example.",
    },
]


def calculate_xp(log_count: int) -> int:
    return log_count * XP_PER_WORKOUT


def _rank_index(xp: int) -> int:
    for i, rank in enumerate(RANKS):
        if xp >= rank["min_xp"] and (rank["max_xp"] is None or xp <= rank["max_xp"]):
            return i
    return 0


def get_rank_details(xp: int) -> Dict[str, Any]:
    return RANKS[_rank_index(xp)]


def calculate_rank(xp: int) -> str:
    return get_rank_details(xp)["name"]


def get_rank_by_name(name: str) -> Optional[Dict[str, Any]]:
    return next((r for r in RANKS if r["name"] == name), None)


def is_max_rank(xp: int) -> bool:
    return _rank_index(xp) == len(RANKS) - 1


def get_xp_to_next_rank(xp: int) -> int:
    if is_max_rank(xp):
        return 0
    return RANKS[_rank_index(xp) + 1]["min_xp"] - xp


def get_next_rank_name(xp: int) -> Optional[str]:
    if is_max_rank(xp):
        return None
    return RANKS[_rank_index(xp) + 1]["name"]


def get_rank_progress(xp: int) -> float:
    """Percentage (0-100) through the current rank's XP band."""
    rank = get_rank_details(xp)
    if rank["max_xp"] is None:
        return 100.0
    band = rank["max_xp"] - rank["min_xp"] + 1
    progress = (xp - rank["min_xp"]) / band * 100
    return min(max(progress, 0.0), 100.0)


def get_workouts_to_next_rank(xp: int) -> int:
    return math.ceil(get_xp_to_next_rank(xp) / XP_PER_WORKOUT)


def has_ranked_up(previous_xp: int, current_xp: int) -> bool:
    return calculate_rank(previous_xp) != calculate_rank(current_xp)


def get_xp_breakdown(xp: int) -> Dict[str, Any]:
    rank = get_rank_details(xp)
    return {
        "total_xp": xp,
        "current_rank": rank["name"],
        "current_rank_min_xp": rank["min_xp"],
        "current_rank_max_xp": rank["max_xp"],
        "next_rank": get_next_rank_name(xp),
        "xp_to_next_rank": get_xp_to_next_rank(xp),
        "progress_percentage": get_rank_progress(xp),
        "workouts_to_next_rank": get_workouts_to_next_rank(xp),
        "is_max_rank": rank["max_xp"] is None,
    }


def format_xp(xp: int) -> str:
    return f"{xp:,} XP"
