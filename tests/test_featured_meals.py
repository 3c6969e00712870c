from datetime import date, timedelta

from tests.conftest import auth


def _recipe(db, title="COMBAT OATS", min_tier=".50 Cal"):
    return db.insert_row("recipes", {"title": title, "calories": 450, "protein": 35, "min_tier": min_tier})


def _feature(client, user, recipe, day):
    return client.put(
        f"/api/v1/featured-meals/{day.isoformat()}",
        json={"recipe_id": recipe["id"]},
        headers=auth(user),
    )


def test_meal_of_the_day_is_open_to_every_member(client, make_profile, db):
    coach = make_profile(role="coach", tier=None)
    recruit = make_profile(tier=".223")
    oats = _recipe(db)

    assert client.get("/api/v1/featured-meals/today", headers=auth(recruit)).json() is None

    r = _feature(client, coach, oats, date.today())
    assert r.status_code == 200
    assert r.json()["recipe"]["title"] == "COMBAT OATS"

    r = client.get("/api/v1/featured-meals/today", headers=auth(recruit))
    assert r.status_code == 200
    assert r.json()["recipe_id"] == oats["id"]
    assert r.json()["recipe"]["min_tier"] == ".50 Cal"


def test_featuring_replaces_the_days_meal(client, make_profile, db):
    coach = make_profile(role="coach", tier=None)
    oats = _recipe(db)
    rice = _recipe(db, "RICE BOWL")
    day = date.today() + timedelta(days=2)

    _feature(client, coach, oats, day)
    _feature(client, coach, rice, day)
    assert len(db.rows("featured_meals")) == 1
    r = client.get(f"/api/v1/featured-meals/{day.isoformat()}", headers=auth(coach))
    assert r.json()["recipe"]["title"] == "RICE BOWL"
    assert _feature(client, coach, {"id": "missing"}, day).status_code == 404


def test_upcoming_covers_next_week(client, make_profile, db):
    admin = make_profile(role="admin", tier=None)
    user = make_profile()
    oats = _recipe(db)
    today = date.today()
    for offset in (8, 3, 0, -1):
        _feature(client, admin, oats, today + timedelta(days=offset))

    upcoming = client.get("/api/v1/featured-meals/upcoming", headers=auth(user)).json()
    assert [m["featured_date"] for m in upcoming] == [
        today.isoformat(), (today + timedelta(days=3)).isoformat()
    ]


def test_members_cannot_manage(client, make_profile, db):
    user = make_profile()
    coach = make_profile(role="coach", tier=None)
    oats = _recipe(db)
    day = date.today()

    assert _feature(client, user, oats, day).status_code == 403
    _feature(client, coach, oats, day)
    assert client.delete(f"/api/v1/featured-meals/{day.isoformat()}", headers=auth(user)).status_code == 403
    assert client.delete(f"/api/v1/featured-meals/{day.isoformat()}", headers=auth(coach)).status_code == 204
    assert client.delete(f"/api/v1/featured-meals/{day.isoformat()}", headers=auth(coach)).status_code == 404
    assert client.get("/api/v1/featured-meals/not-a-date", headers=auth(user)).status_code == 422
