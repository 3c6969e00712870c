from datetime import date, timedelta

from tests.conftest import auth
from g4g.modules.records.schemas import RecordResponse
from g4g.modules.records.service import group_by_exercise


def _record(client, user, exercise="Bench Press", value=225, **fields):
    return client.post(
        "/api/v1/records",
        json={"exercise_name": exercise, "value": value, **fields},
        headers=auth(user),
    )


def _row(exercise, value, day="2026-03-01"):
    return RecordResponse(
        id=f"{exercise}-{value}", user_id="u", exercise_name=exercise,
        record_type="weight", value=value, unit="lbs", achieved_at=day,
    )


def test_group_by_exercise_puts_best_first():
    groups = group_by_exercise([_row("squat", 300), _row("Bench Press", 200), _row("squat", 315)])
    assert [g.exercise_name for g in groups] == ["Bench Press", "squat"]
    assert groups[1].best.value == 315
    assert [r.value for r in groups[1].history] == [315, 300]


def test_log_record_defaults(client, make_profile):
    user = make_profile()
    r = _record(client, user, "  Deadlift  ", 405, notes="   ")
    assert r.status_code == 201
    body = r.json()
    assert body["exercise_name"] == "Deadlift"
    assert body["record_type"] == "weight"
    assert body["unit"] == "lbs"
    assert body["notes"] is None
    assert body["achieved_at"] == date.today().isoformat()

    r = _record(client, user, "Plank Hold", 180, record_type="time")
    assert r.json()["unit"] == "seconds"
    r = _record(client, user, "Pull-ups", 20, record_type="reps", unit="reps")
    assert r.json()["unit"] == "reps"


def test_record_validation(client, make_profile):
    user = make_profile()
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    assert _record(client, user, value=0).status_code == 422
    assert _record(client, user, exercise="   ").status_code == 422
    assert _record(client, user, record_type="distance").status_code == 422
    assert _record(client, user, achieved_at=tomorrow).status_code == 422


def test_list_and_best(client, make_profile):
    user = make_profile()
    other = make_profile()
    _record(client, user, "Squat", 300, achieved_at="2026-01-10")
    _record(client, user, "Squat", 315, achieved_at="2026-02-10")
    _record(client, user, "Bench Press", 225, achieved_at="2026-03-01")
    _record(client, other, "Squat", 500)

    records = client.get("/api/v1/records", headers=auth(user)).json()
    assert [r["achieved_at"] for r in records] == ["2026-03-01", "2026-02-10", "2026-01-10"]

    best = client.get("/api/v1/records/best", headers=auth(user)).json()
    assert [(g["exercise_name"], g["best"]["value"]) for g in best] == [("Bench Press", 225), ("Squat", 315)]
    assert len(best[1]["history"]) == 2


def test_update_and_delete_are_owner_only(client, make_profile):
    user = make_profile()
    other = make_profile()
    record = _record(client, user).json()

    r = client.put(f"/api/v1/records/{record['id']}", json={"value": 235}, headers=auth(other))
    assert r.status_code == 404
    r = client.put(f"/api/v1/records/{record['id']}", json={"value": 235, "notes": "Paused"}, headers=auth(user))
    assert r.status_code == 200
    assert r.json()["value"] == 235
    assert r.json()["notes"] == "Paused"
    assert r.json()["exercise_name"] == "Bench Press"

    assert client.delete(f"/api/v1/records/{record['id']}", headers=auth(other)).status_code == 404
    assert client.delete(f"/api/v1/records/{record['id']}", headers=auth(user)).status_code == 204
    assert client.get("/api/v1/records", headers=auth(user)).json() == []
