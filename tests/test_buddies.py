from datetime import datetime, timedelta, timezone

import pytest

from tests.conftest import auth
from g4g.modules.buddies.service import is_buddy_inactive


def _request(client, sender, email):
    return client.post("/api/v1/buddies/requests", json={"buddy_email": email}, headers=auth(sender))


@pytest.fixture
def friends(client, make_profile):
    """Two users whose buddy request has been accepted"""
    alice = make_profile(email="alice@example.com")
    bob = make_profile(email="bob@example.com")
    request = _request(client, alice, "bob@example.com").json()
    client.post(f"/api/v1/buddies/requests/{request['id']}/accept", headers=auth(bob))
    return alice, bob


def test_is_buddy_inactive():
    now = datetime(2026, 3, 10, 12, tzinfo=timezone.utc)
    assert is_buddy_inactive(None, 24, now=now)
    assert is_buddy_inactive((now - timedelta(hours=25)).isoformat(), 24, now=now)
    assert not is_buddy_inactive((now - timedelta(hours=2)).isoformat(), 24, now=now)


def test_send_request(client, make_profile):
    alice = make_profile(email="alice@example.com")
    bob = make_profile(email="bob@example.com")

    r = _request(client, alice, "Bob@Example.com")
    assert r.status_code == 201
    assert r.json()["buddy_id"] == bob["id"]
    assert r.json()["status"] == "pending"

    assert _request(client, alice, "nobody@example.com").status_code == 404
    assert _request(client, alice, "alice@example.com").status_code == 400
    assert _request(client, alice, "bob@example.com").status_code == 400
    assert _request(client, bob, "alice@example.com").status_code == 400
    assert _request(client, alice, "not-an-email").status_code == 422


def test_incoming_outgoing_and_accept(client, make_profile, db):
    alice = make_profile(email="alice@example.com")
    bob = make_profile(email="bob@example.com")
    request = _request(client, alice, "bob@example.com").json()

    incoming = client.get("/api/v1/buddies/requests/incoming", headers=auth(bob)).json()
    assert [r["id"] for r in incoming] == [request["id"]]
    assert incoming[0]["profile"]["email"] == "alice@example.com"
    outgoing = client.get("/api/v1/buddies/requests/outgoing", headers=auth(alice)).json()
    assert outgoing[0]["profile"]["email"] == "bob@example.com"

    assert client.post(f"/api/v1/buddies/requests/{request['id']}/accept", headers=auth(alice)).status_code == 404
    r = client.post(f"/api/v1/buddies/requests/{request['id']}/accept", headers=auth(bob))
    assert r.status_code == 200
    assert r.json()["status"] == "accepted"
    assert len(db.rows("buddies")) == 2

    assert client.post(f"/api/v1/buddies/requests/{request['id']}/accept", headers=auth(bob)).status_code == 404
    assert client.get("/api/v1/buddies/requests/incoming", headers=auth(bob)).json() == []


def test_friendship_visible_both_ways(client, friends):
    alice, bob = friends
    alice_buddies = client.get("/api/v1/buddies", headers=auth(alice)).json()
    bob_buddies = client.get("/api/v1/buddies", headers=auth(bob)).json()

    assert [b["buddy_id"] for b in alice_buddies] == [bob["id"]]
    assert [b["buddy_id"] for b in bob_buddies] == [alice["id"]]
    assert alice_buddies[0]["inactive"] is True
    assert client.get("/api/v1/buddies/count", headers=auth(alice)).json() == {"count": 1}


def test_reject_and_cancel(client, make_profile, db):
    alice = make_profile(email="alice@example.com")
    bob = make_profile(email="bob@example.com")
    carol = make_profile(email="carol@example.com")

    first = _request(client, alice, "bob@example.com").json()
    second = _request(client, alice, "carol@example.com").json()

    assert client.delete(f"/api/v1/buddies/requests/{first['id']}", headers=auth(carol)).status_code == 404
    assert client.delete(f"/api/v1/buddies/requests/{first['id']}", headers=auth(bob)).status_code == 204
    assert client.delete(f"/api/v1/buddies/requests/{second['id']}", headers=auth(alice)).status_code == 204
    assert db.rows("buddies") == []


def test_remove_buddy(client, friends, db):
    alice, bob = friends
    assert client.delete(f"/api/v1/buddies/{bob['id']}", headers=auth(alice)).status_code == 204
    assert db.rows("buddies") == []
    assert client.delete(f"/api/v1/buddies/{bob['id']}", headers=auth(alice)).status_code == 404


def test_nudge(client, friends, make_profile, db):
    alice, bob = friends
    stranger = make_profile()

    assert client.post(f"/api/v1/buddies/{stranger['id']}/nudge", headers=auth(alice)).status_code == 403

    r = client.post(f"/api/v1/buddies/{bob['id']}/nudge", headers=auth(alice))
    assert r.status_code == 201
    assert r.json()["type"] == "buddy_nudge"
    assert r.json()["user_id"] == bob["id"]

    assert client.post(f"/api/v1/buddies/{bob['id']}/nudge", headers=auth(alice)).status_code == 400
    assert len(db.rows("notifications")) == 1


def test_cannot_nudge_active_buddy(client, friends, db):
    alice, bob = friends
    for profile in db.rows("profiles"):
        if profile["id"] == alice["id"]:
            profile["last_active"] = db.now_iso()

    assert client.post(f"/api/v1/buddies/{alice['id']}/nudge", headers=auth(bob)).status_code == 400
