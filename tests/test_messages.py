import pytest

from tests.conftest import auth
from g4g.modules.messages.service import can_message


@pytest.fixture
def pair(make_profile):
    coach = make_profile(role="coach", tier=None)
    trainee = make_profile(coach_id=coach["id"])
    return coach, trainee


def _send(client, sender, receiver, content):
    return client.post(
        "/api/v1/messages",
        json={"receiver_id": receiver["id"], "content": content},
        headers=auth(sender),
    )


def test_can_message_rules():
    coach = {"id": "c", "role": "coach", "coach_id": None}
    trainee = {"id": "t", "role": "user", "coach_id": "c"}
    stranger = {"id": "s", "role": "user", "coach_id": None}
    admin = {"id": "a", "role": "admin", "coach_id": None}

    assert can_message(trainee, coach)
    assert can_message(coach, trainee)
    assert can_message(admin, stranger)
    assert not can_message(stranger, coach)
    assert not can_message(trainee, stranger)


def test_trainee_and_coach_exchange_messages(client, pair):
    coach, trainee = pair
    r = _send(client, trainee, coach, "  Finished today's mission  ")
    assert r.status_code == 201
    assert r.json()["content"] == "Finished today's mission"
    assert r.json()["is_read"] is False
    assert _send(client, coach, trainee, "Good work").status_code == 201


def test_send_rejections(client, pair, make_profile):
    coach, trainee = pair
    stranger = make_profile()

    assert _send(client, stranger, coach, "hello").status_code == 403
    assert _send(client, trainee, trainee, "hello").status_code == 400
    assert _send(client, trainee, {"id": "missing"}, "hello").status_code == 404
    assert _send(client, trainee, coach, "   ").status_code == 422
    assert _send(client, trainee, coach, "x" * 1001).status_code == 422


def test_length_limit_applies_after_trimming(client, pair):
    coach, trainee = pair
    r = _send(client, trainee, coach, "   " + "x" * 1000 + "   ")
    assert r.status_code == 201
    assert r.json()["content"] == "x" * 1000


def test_admin_can_message_anyone(client, make_profile):
    admin = make_profile(role="admin", tier=None)
    user = make_profile()
    assert _send(client, admin, user, "Welcome aboard").status_code == 201


def test_conversation_order_limit_and_since(client, pair):
    coach, trainee = pair
    first = _send(client, trainee, coach, "one").json()
    _send(client, coach, trainee, "two")
    _send(client, trainee, coach, "three")

    r = client.get(f"/api/v1/messages/conversations/{coach['id']}", headers=auth(trainee))
    body = r.json()
    assert [m["content"] for m in body["messages"]] == ["one", "two", "three"]
    assert body["partner_id"] == coach["id"]
    assert body["poll_interval_seconds"] == 5

    r = client.get(
        f"/api/v1/messages/conversations/{coach['id']}", params={"limit": 2}, headers=auth(trainee)
    )
    assert [m["content"] for m in r.json()["messages"]] == ["two", "three"]

    r = client.get(
        f"/api/v1/messages/conversations/{trainee['id']}",
        params={"since": first["created_at"]},
        headers=auth(coach),
    )
    assert [m["content"] for m in r.json()["messages"]] == ["two", "three"]


def test_conversation_list_and_read_state(client, pair, make_profile):
    coach, trainee = pair
    other = make_profile(coach_id=coach["id"])
    _send(client, trainee, coach, "from trainee")
    _send(client, other, coach, "from other")
    _send(client, coach, other, "reply to other")

    r = client.get("/api/v1/messages/conversations", headers=auth(coach))
    summaries = r.json()
    assert [s["user_id"] for s in summaries] == [other["id"], trainee["id"]]
    assert summaries[0]["last_message"] == "reply to other"
    assert summaries[0]["user_email"] == other["email"]
    assert all(s["unread"] for s in summaries)

    assert client.get("/api/v1/messages/unread-count", headers=auth(coach)).json() == {"count": 2}

    r = client.post(f"/api/v1/messages/conversations/{trainee['id']}/read", headers=auth(coach))
    assert r.json() == {"updated": 1}
    assert client.get("/api/v1/messages/unread-count", headers=auth(coach)).json() == {"count": 1}


def test_mark_single_message_read(client, pair):
    coach, trainee = pair
    message = _send(client, trainee, coach, "check in").json()

    assert client.put(f"/api/v1/messages/{message['id']}/read", headers=auth(trainee)).status_code == 404
    r = client.put(f"/api/v1/messages/{message['id']}/read", headers=auth(coach))
    assert r.status_code == 200
    assert r.json()["is_read"] is True


def test_only_sender_deletes(client, pair, db):
    coach, trainee = pair
    message = _send(client, trainee, coach, "oops").json()

    assert client.delete(f"/api/v1/messages/{message['id']}", headers=auth(coach)).status_code == 404
    assert client.delete(f"/api/v1/messages/{message['id']}", headers=auth(trainee)).status_code == 204
    assert db.rows("messages") == []


def test_inbox_is_for_coaches(client, pair):
    coach, trainee = pair
    _send(client, trainee, coach, "one")
    _send(client, trainee, coach, "two")

    r = client.get("/api/v1/messages/inbox", headers=auth(coach))
    assert [m["content"] for m in r.json()] == ["two", "one"]
    assert client.get("/api/v1/messages/inbox", headers=auth(trainee)).status_code == 403
