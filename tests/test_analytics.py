from datetime import date, timedelta

from tests.conftest import auth
from g4g.modules.analytics.service import build_streak_history, build_xp_trend


def _log(db, user, day):
    # appended directly so the XP trigger does not fire
    db.rows("user_logs").append({
        "id": f"log-{len(db.rows('user_logs'))}",
        "user_id": user["id"],
        "workout_id": "w",
        "date": day.isoformat(),
    })


def test_build_streak_history_marks_gaps():
    start = date(2026, 3, 1)
    history = build_streak_history([date(2026, 3, 1), date(2026, 3, 3)], start, date(2026, 3, 4))
    assert [d.completed for d in history] == [True, False, True, False]
    assert history[-1].date == date(2026, 3, 4)
    assert build_streak_history([], start, date(2026, 2, 28)) == []


def test_build_xp_trend_is_cumulative():
    logs = [date(2026, 3, 5), date(2026, 3, 1), date(2026, 3, 3)]
    assert [(p.date.day, p.xp) for p in build_xp_trend(logs)] == [(1, 100), (3, 200), (5, 300)]
    assert [(p.date.day, p.xp) for p in build_xp_trend(logs, since=date(2026, 3, 2))] == [(3, 200), (5, 300)]


def test_dashboard(client, make_profile, db):
    user = make_profile(xp=1200, current_streak=4, tier=".556")
    today = date.today()
    _log(db, user, today)
    _log(db, user, today - timedelta(days=8))
    db.insert_row("user_badges", {"user_id": user["id"], "badge_name": "First Blood"})
    db.insert_row("user_badges", {"user_id": user["id"], "badge_name": "Iron Week"})

    r = client.get("/api/v1/analytics/dashboard", headers=auth(user))
    assert r.status_code == 200
    body = r.json()
    assert body["total_workouts"] == 2
    assert body["workouts_this_week"] == 1
    assert body["badges_earned"] == 2
    assert body["xp"] == 1200
    assert body["current_streak"] == 4
    assert body["tier"] == ".556"
    assert body["rank"]["current_rank"] == "Soldier"


def test_streak_history_endpoint(client, make_profile, db):
    user = make_profile()
    today = date.today()
    _log(db, user, today)
    _log(db, user, today - timedelta(days=2))
    _log(db, user, today - timedelta(days=30))

    r = client.get("/api/v1/analytics/streak-history", params={"days": 7}, headers=auth(user))
    days = r.json()
    assert len(days) == 7
    assert days[-1] == {"date": today.isoformat(), "completed": True}
    assert [d["completed"] for d in days] == [False, False, False, False, True, False, True]


def test_xp_trend_endpoint(client, make_profile, db):
    user = make_profile()
    today = date.today()
    _log(db, user, today - timedelta(days=10))
    _log(db, user, today - timedelta(days=1))
    _log(db, user, today)

    r = client.get("/api/v1/analytics/xp-trend", params={"days": 3}, headers=auth(user))
    assert [p["xp"] for p in r.json()] == [200, 300]


def test_body_metrics(client, make_profile):
    user = make_profile()
    today = date.today()

    r = client.post(
        "/api/v1/analytics/body-metrics",
        json={"weight_lbs": 185.5, "body_fat_percentage": 18, "date": (today - timedelta(days=7)).isoformat()},
        headers=auth(user),
    )
    assert r.status_code == 201
    assert r.json()["weight_lbs"] == 185.5
    r = client.post("/api/v1/analytics/body-metrics", json={"weight_lbs": 183}, headers=auth(user))
    assert r.json()["date"] == today.isoformat()

    metrics = client.get("/api/v1/analytics/body-metrics", headers=auth(user)).json()
    assert [m["weight_lbs"] for m in metrics] == [185.5, 183]
    latest = client.get("/api/v1/analytics/body-metrics", params={"limit": 1}, headers=auth(user)).json()
    assert [m["weight_lbs"] for m in latest] == [183]


def test_body_metric_validation(client, make_profile):
    user = make_profile()
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    assert client.post(
        "/api/v1/analytics/body-metrics", json={"weight_lbs": 180, "date": tomorrow}, headers=auth(user)
    ).status_code == 422
    assert client.post(
        "/api/v1/analytics/body-metrics", json={"weight_lbs": 40}, headers=auth(user)
    ).status_code == 422
    assert client.post(
        "/api/v1/analytics/body-metrics", json={"weight_lbs": 180, "body_fat_percentage": 75}, headers=auth(user)
    ).status_code == 422


def test_only_owner_deletes_body_metric(client, make_profile, db):
    user = make_profile()
    other = make_profile()
    metric = client.post("/api/v1/analytics/body-metrics", json={"weight_lbs": 180}, headers=auth(user)).json()

    assert client.delete(f"/api/v1/analytics/body-metrics/{metric['id']}", headers=auth(other)).status_code == 404
    assert client.delete(f"/api/v1/analytics/body-metrics/{metric['id']}", headers=auth(user)).status_code == 204
    assert db.rows("body_metrics") == []
