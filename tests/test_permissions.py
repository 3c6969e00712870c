from g4g.config.permissions_config import PERMISSION_MATRIX, get_role_permissions


def _role(name):
    return next(r for r in PERMISSION_MATRIX["roles"] if r["name"] == name)


def test_admin_has_every_permission():
    all_permissions = {p["name"] for p in PERMISSION_MATRIX["permissions"]}
    assert set(_role("admin")["permissions"]) == all_permissions


def test_coach_authors_content_members_do_not():
    coach = get_role_permissions("coach")
    member = get_role_permissions("user")
    for perm in ("workouts:create", "recipes:update", "profiles:roster", "messages:inbox"):
        assert perm in coach
        assert perm not in member


def test_briefing_management_is_admin_only():
    for role in ("coach", "soldier", "user"):
        perms = get_role_permissions(role)
        assert "briefings:read" in perms
        assert "briefings:create" not in perms


def test_soldier_and_user_share_member_permissions():
    assert get_role_permissions("soldier") == get_role_permissions("user")


def test_unknown_role_falls_back_to_member():
    assert get_role_permissions("ghost") == get_role_permissions("user")
