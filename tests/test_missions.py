from datetime import date, timedelta

from g4g.modules.missions.service import group_logs_by_week
from tests.conftest import auth


def _workout(db, tier=".223"):
    return db.insert_row("workouts", {
        "title": "BASIC RECON",
        "description": "Foundation bodyweight session",
        "tier": tier,
        "scheduled_date": date.today().isoformat(),
        "sets_reps": [{"exercise": "Pushups", "reps": "3 x 10"}],
    })


def _log(db, user, days_ago=0, workout_id="w-1"):
    # Appended directly so the XP trigger does not fire
    row = {
        "id": f"log-{len(db.rows('user_logs'))}",
        "user_id": user["id"],
        "workout_id": workout_id,
        "date": (date.today() - timedelta(days=days_ago)).isoformat(),
        "duration": 30,
        "notes": None,
        "created_at": db.now_iso(),
    }
    db.rows("user_logs").append(row)
    return row


def test_group_logs_by_week():
    end = date(2026, 3, 29)
    dates = [end, end - timedelta(days=3), end - timedelta(days=8), end - timedelta(days=27), end - timedelta(days=40)]
    weeks = group_logs_by_week(dates, 4, end)
    assert [(w.week, w.count) for w in weeks] == [
        ("Week 1", 1),
        ("Week 2", 0),
        ("Week 3", 1),
        ("Week 4", 2),
    ]


def test_complete_mission_rereads_xp(client, make_profile, db):
    user = make_profile(xp=900, workout_count=9, current_streak=2)
    workout = _workout(db)

    r = client.post(
        "/api/v1/missions",
        json={"workout_id": workout["id"], "duration": 45, "notes": "Felt strong"},
        headers=auth(user),
    )
    assert r.status_code == 201
    body = r.json()
    assert body["xp"] == 1000
    assert body["workout_count"] == 10
    assert body["current_streak"] == 3
    assert body["ranked_up"] is True
    assert body["rank"]["current_rank"] == "Soldier"
    assert body["log"]["date"] == date.today().isoformat()


def test_complete_mission_rejects_duplicates_and_unknown_workouts(client, make_profile, db):
    user = make_profile()
    workout = _workout(db)
    payload = {"workout_id": workout["id"], "duration": 30}

    assert client.post("/api/v1/missions", json=payload, headers=auth(user)).status_code == 201
    r = client.post("/api/v1/missions", json=payload, headers=auth(user))
    assert r.status_code == 400

    r = client.post("/api/v1/missions", json={"workout_id": "nope", "duration": 30}, headers=auth(user))
    assert r.status_code == 404

    r = client.post("/api/v1/missions", json={"workout_id": workout["id"], "duration": 0}, headers=auth(user))
    assert r.status_code == 422


def test_backdated_mission(client, make_profile, db):
    user = make_profile()
    workout = _workout(db)
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    r = client.post(
        "/api/v1/missions",
        json={"workout_id": workout["id"], "duration": 30, "date": yesterday},
        headers=auth(user),
    )
    assert r.json()["log"]["date"] == yesterday
    r = client.get(f"/api/v1/missions/today/{workout['id']}", headers=auth(user))
    assert r.json() == {"has_logged": False}


def test_future_dates_are_rejected(client, make_profile, db):
    user = make_profile()
    workout = _workout(db)
    codes = [
        client.post(
            "/api/v1/missions",
            json={"workout_id": workout["id"], "duration": 30, "date": (date.today() + timedelta(days=d)).isoformat()},
            headers=auth(user),
        ).status_code
        for d in (1, 366)
    ]
    assert codes == [400, 400]
    assert db.rows("user_logs") == []
    assert user["xp"] == 0


def test_backdating_window(client, make_profile, db):
    user = make_profile()
    workout = _workout(db)

    def log(days_ago):
        return client.post(
            "/api/v1/missions",
            json={"workout_id": workout["id"], "duration": 30,
                  "date": (date.today() - timedelta(days=days_ago)).isoformat()},
            headers=auth(user),
        )

    assert log(8).status_code == 400
    assert log(7).status_code == 201
    assert len(db.rows("user_logs")) == 1


def test_has_logged_today(client, make_profile, db):
    user = make_profile()
    workout = _workout(db)
    client.post("/api/v1/missions", json={"workout_id": workout["id"], "duration": 30}, headers=auth(user))
    r = client.get(f"/api/v1/missions/today/{workout['id']}", headers=auth(user))
    assert r.json() == {"has_logged": True}


def test_list_latest_and_range(client, make_profile, db):
    user = make_profile()
    other = make_profile()
    _log(db, user, days_ago=5)
    _log(db, user, days_ago=1)
    _log(db, user, days_ago=10)
    _log(db, other, days_ago=0)

    logs = client.get("/api/v1/missions", headers=auth(user)).json()
    assert len(logs) == 3
    assert logs[0]["date"] == (date.today() - timedelta(days=1)).isoformat()

    latest = client.get("/api/v1/missions/latest", headers=auth(user)).json()
    assert latest["date"] == logs[0]["date"]

    start = (date.today() - timedelta(days=7)).isoformat()
    end = date.today().isoformat()
    ranged = client.get("/api/v1/missions/range", params={"start": start, "end": end}, headers=auth(user)).json()
    assert len(ranged) == 2

    r = client.get("/api/v1/missions/range", params={"start": end, "end": start}, headers=auth(user))
    assert r.status_code == 400


def test_stats_and_consistency(client, make_profile, db):
    user = make_profile(xp=300, current_streak=2)
    _log(db, user, days_ago=0)
    _log(db, user, days_ago=1)
    _log(db, user, days_ago=9)

    stats = client.get("/api/v1/missions/stats", headers=auth(user)).json()
    assert stats == {"total_logs": 3, "total_xp": 300, "current_streak": 2}

    weeks = client.get("/api/v1/missions/consistency", params={"weeks": 4}, headers=auth(user)).json()
    assert [w["week"] for w in weeks] == ["Week 1", "Week 2", "Week 3", "Week 4"]
    assert weeks[-1]["count"] == 2
    assert weeks[-2]["count"] == 1


def test_update_and_delete_are_owner_only(client, make_profile, db):
    user = make_profile()
    other = make_profile()
    log = _log(db, user)

    r = client.put(f"/api/v1/missions/{log['id']}", json={"notes": "edited"}, headers=auth(other))
    assert r.status_code == 404
    r = client.put(f"/api/v1/missions/{log['id']}", json={"notes": "edited", "duration": 50}, headers=auth(user))
    assert r.status_code == 200
    assert r.json()["duration"] == 50

    assert client.delete(f"/api/v1/missions/{log['id']}", headers=auth(other)).status_code == 404
    assert client.delete(f"/api/v1/missions/{log['id']}", headers=auth(user)).status_code == 204
    assert db.rows("user_logs") == []
