import pytest

from tests.conftest import auth
from g4g.modules.coaches.service import haversine_miles, split_specialties

AUSTIN = (30.2672, -97.7431)
ROUND_ROCK = (30.5083, -97.6789)
DALLAS = (32.7767, -96.7970)


@pytest.fixture
def directory(make_profile):
    def coach(name, coords=None, specialties=None, is_public=True):
        lat, lng = coords or (None, None)
        return make_profile(
            role="coach", tier=None, email=f"{name}@example.com", is_public=is_public,
            specialties=specialties, latitude=lat, longitude=lng, years_experience=5,
        )
    return {
        "austin": coach("sarge", AUSTIN, "Strength, Nutrition"),
        "round_rock": coach("gunny", ROUND_ROCK, "endurance"),
        "dallas": coach("major", DALLAS, "strength"),
        "remote": coach("online", None, "Mobility"),
        "hidden": coach("ghost", AUSTIN, "strength", is_public=False),
    }


def test_haversine_and_specialties():
    assert haversine_miles(*AUSTIN, *AUSTIN) == 0
    assert 175 < haversine_miles(*AUSTIN, *DALLAS) < 190
    assert split_specialties(" strength, ,nutrition ") == ["strength", "nutrition"]
    assert split_specialties(None) == []


def test_directory_is_public_and_lists_public_coaches(client, directory, make_profile):
    make_profile(email="member@example.com", is_public=True)
    r = client.get("/api/v1/coaches")
    assert r.status_code == 200
    names = [c["display_name"] for c in r.json()]
    assert names == ["gunny", "major", "online", "sarge"]
    sarge = next(c for c in r.json() if c["display_name"] == "sarge")
    assert sarge["specialties"] == ["Strength", "Nutrition"]
    assert sarge["distance_miles"] is None


def test_location_filter_sorts_by_distance(client, directory):
    r = client.get("/api/v1/coaches", params={"lat": AUSTIN[0], "lng": AUSTIN[1]})
    assert [c["display_name"] for c in r.json()] == ["sarge", "gunny"]
    assert r.json()[0]["distance_miles"] == 0

    r = client.get("/api/v1/coaches", params={"lat": AUSTIN[0], "lng": AUSTIN[1], "radius": 250})
    assert [c["display_name"] for c in r.json()] == ["sarge", "gunny", "major"]


def test_location_parameter_errors(client, directory):
    assert client.get("/api/v1/coaches", params={"lat": AUSTIN[0]}).status_code == 400
    assert client.get("/api/v1/coaches", params={"lat": 95, "lng": 0}).status_code == 422
    assert client.get("/api/v1/coaches", params={"lat": 0, "lng": 0, "radius": 501}).status_code == 422
    assert client.get("/api/v1/coaches", params={"lat": 0, "lng": 0, "radius": 0}).status_code == 422


def test_search_and_specialty_filters(client, directory):
    r = client.get("/api/v1/coaches", params={"search": "SAR"})
    assert [c["display_name"] for c in r.json()] == ["sarge"]
    r = client.get("/api/v1/coaches", params={"specialty": "strength"})
    assert [c["display_name"] for c in r.json()] == ["major", "sarge"]
    assert client.get("/api/v1/coaches/specialties").json() == [
        "endurance", "Mobility", "Nutrition", "Strength", "strength"
    ]


def test_coach_detail(client, directory):
    r = client.get(f"/api/v1/coaches/{directory['austin']['id']}")
    assert r.status_code == 200
    assert r.json()["years_experience"] == 5
    assert client.get(f"/api/v1/coaches/{directory['hidden']['id']}").status_code == 404
    assert client.get("/api/v1/coaches/missing").status_code == 404


def test_coach_updates_own_listing(client, make_profile):
    coach = make_profile(role="coach", tier=None, email="drill@example.com")
    member = make_profile()
    payload = {"bio": "20 years in", "specialties": "strength", "latitude": AUSTIN[0], "longitude": AUSTIN[1], "is_public": True}

    r = client.put("/api/v1/coaches/me", json=payload, headers=auth(coach))
    assert r.status_code == 200
    assert r.json()["display_name"] == "drill"
    assert r.json()["specialties"] == ["strength"]
    assert [c["id"] for c in client.get("/api/v1/coaches").json()] == [coach["id"]]

    assert client.put("/api/v1/coaches/me", json={"latitude": 10}, headers=auth(coach)).status_code == 422
    assert client.put("/api/v1/coaches/me", json=payload, headers=auth(member)).status_code == 403
