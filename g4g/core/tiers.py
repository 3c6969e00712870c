"""
Tier system: caliber-named brackets assigned from the Zero Day pushup count.
Tiers gate workout and recipe visibility.
"""

from typing import Any, Dict, List, Optional

NOVICE = ".223"
INTERMEDIATE = ".556"
ADVANCED = ".762"
ELITE = ".50 Cal"

TIER_ORDER = [NOVICE, INTERMEDIATE, ADVANCED, ELITE]
DEFAULT_TIER = NOVICE

TIER_INFO: Dict[str, Dict[str, Any]] = {
    NOVICE: {
        "id": NOVICE,
        "name": "Novice",
        "description": "Building foundation strength",
        "min_pushups": 0,
        "max_pushups": 9,
    },
    INTERMEDIATE: {
        "id": INTERMEDIATE,
        "name": "Intermediate",
        "description": "Developing tactical fitness",
        "min_pushups": 10,
        "max_pushups": 25,
    },
    ADVANCED: {
        "id": ADVANCED,
        "name": "Advanced",
        "description": "Combat-ready operator",
        "min_pushups": 26,
        "max_pushups": 50,
    },
    ELITE: {
        "id": ELITE,
        "name": "Elite",
        "description": "Special forces status",
        "min_pushups": 51,
        "max_pushups": None,
    },
}

STAFF_ROLES = ("admin", "coach")
PREMIUM_ROLES = ("admin", "coach", "soldier")


def assign_tier(pushups: int) -> str:
    """Tier for a Zero Day pushup count."""
    if pushups < 0:
        raise ValueError("pushups cannot be negative")
    if pushups < 10:
        return NOVICE
    if pushups <= 25:
        return INTERMEDIATE
    if pushups <= 50:
        return ADVANCED
    return ELITE


def get_tier_info(tier: str) -> Dict[str, Any]:
    if tier not in TIER_INFO:
        raise ValueError(f"Unknown tier: {tier}")
    return dict(TIER_INFO[tier])


def get_all_tiers() -> List[Dict[str, Any]]:
    return [dict(TIER_INFO[t]) for t in TIER_ORDER]


def tier_index(tier: Optional[str]) -> int:
    # Missing or unknown tiers rank as the entry tier
    if tier in TIER_ORDER:
        return TIER_ORDER.index(tier)
    return 0


def meets_or_exceeds_tier(user_tier: Optional[str], required_tier: Optional[str]) -> bool:
    return tier_index(user_tier) >= tier_index(required_tier)


def is_admin(profile: Optional[Dict[str, Any]]) -> bool:
    return bool(profile) and profile.get("role") == "admin"


def is_coach_or_admin(profile: Optional[Dict[str, Any]]) -> bool:
    return bool(profile) and profile.get("role") in STAFF_ROLES


def has_tier_access(profile: Optional[Dict[str, Any]], required_tier: Optional[str]) -> bool:
    """Admin/coach see every tier; everyone else needs a tier at or above the required one."""
    if not profile:
        return False
    if is_coach_or_admin(profile):
        return True
    if not required_tier:
        return True
    return meets_or_exceeds_tier(profile.get("tier") or DEFAULT_TIER, required_tier)


def has_premium_access(profile: Optional[Dict[str, Any]]) -> bool:
    """
    Premium is granted to staff and paying soldiers. A free recruit unlocks it
    only by testing above the entry tier.
    """
    if not profile:
        return False
    if profile.get("role") in PREMIUM_ROLES:
        return True
    tier = profile.get("tier")
    return bool(tier) and tier != NOVICE
