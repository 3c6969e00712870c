import pytest

from g4g.core.tiers import (
    assign_tier, get_tier_info, get_all_tiers, meets_or_exceeds_tier,
    has_tier_access, has_premium_access, is_coach_or_admin,
)


@pytest.mark.parametrize("pushups,tier", [
    (0, ".223"),
    (9, ".223"),
    (10, ".556"),
    (25, ".556"),
    (26, ".762"),
    (50, ".762"),
    (51, ".50 Cal"),
    (200, ".50 Cal"),
])
def test_assign_tier_boundaries(pushups, tier):
    assert assign_tier(pushups) == tier


def test_assign_tier_rejects_negative():
    with pytest.raises(ValueError):
        assign_tier(-1)


def test_tier_info():
    assert get_tier_info(".762")["name"] == "Advanced"
    assert [t["id"] for t in get_all_tiers()] == [".223", ".556", ".762", ".50 Cal"]
    with pytest.raises(ValueError):
        get_tier_info(".308")


def test_tier_comparison_treats_unknown_as_entry_tier():
    assert meets_or_exceeds_tier(".762", ".556")
    assert not meets_or_exceeds_tier(".556", ".762")
    assert meets_or_exceeds_tier(None, ".223")
    assert not meets_or_exceeds_tier("bogus", ".556")


def test_has_tier_access():
    recruit = {"role": "user", "tier": ".223"}
    operator = {"role": "soldier", "tier": ".762"}
    coach = {"role": "coach", "tier": None}

    assert has_tier_access(recruit, ".223")
    assert not has_tier_access(recruit, ".556")
    assert has_tier_access(operator, ".556")
    assert not has_tier_access(operator, ".50 Cal")
    assert has_tier_access(coach, ".50 Cal")
    assert has_tier_access(recruit, None)
    assert has_tier_access({"role": "user", "tier": None}, ".223")
    assert not has_tier_access(None, ".223")


def test_has_premium_access():
    assert has_premium_access({"role": "soldier", "tier": ".223"})
    assert has_premium_access({"role": "admin"})
    assert not has_premium_access({"role": "user", "tier": ".223"})
    assert has_premium_access({"role": "user", "tier": ".556"})
    assert not has_premium_access({"role": "user", "tier": None})
    assert not has_premium_access(None)


def test_staff_roles():
    assert is_coach_or_admin({"role": "coach"})
    assert not is_coach_or_admin({"role": "soldier"})
