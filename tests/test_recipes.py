from tests.conftest import auth


def _recipe(title="COMBAT OATS", **fields):
    payload = {
        "title": title,
        "description": "Protein oats for the morning",
        "calories": 380,
        "protein": 18,
        "carbs": 62,
        "fat": 8,
        "ingredients": [{"name": "Oats", "quantity": 1, "unit": "cup"}],
        "instructions": ["Mix", "Cook"],
        "prep_time_minutes": 10,
        "servings": 1,
    }
    payload.update(fields)
    return payload


def _seed(db, title="COMBAT OATS", **fields):
    return db.insert_row("recipes", _recipe(title, **fields))


def test_coach_creates_recipe(client, make_profile):
    coach = make_profile(role="coach", tier=None)
    r = client.post("/api/v1/recipes", json=_recipe(title="  RANGER STIR-FRY "), headers=auth(coach))
    assert r.status_code == 201
    assert r.json()["title"] == "RANGER STIR-FRY"


def test_member_cannot_create_recipe(client, make_profile):
    user = make_profile()
    assert client.post("/api/v1/recipes", json=_recipe(), headers=auth(user)).status_code == 403


def test_recipe_validation(client, make_profile):
    coach = make_profile(role="coach", tier=None)
    assert client.post("/api/v1/recipes", json=_recipe(title="ab"), headers=auth(coach)).status_code == 422
    assert client.post("/api/v1/recipes", json=_recipe(ingredients=[]), headers=auth(coach)).status_code == 422
    assert client.post("/api/v1/recipes", json=_recipe(instructions=["  "]), headers=auth(coach)).status_code == 422


def test_list_search_and_count(client, make_profile, db):
    user = make_profile()
    _seed(db, "TACTICAL PROTEIN BOWL")
    _seed(db, "COMBAT OATS")
    _seed(db, "PROTEIN PANCAKES")

    assert len(client.get("/api/v1/recipes", headers=auth(user)).json()) == 3
    assert len(client.get("/api/v1/recipes", params={"limit": 2}, headers=auth(user)).json()) == 2

    r = client.get("/api/v1/recipes/search", params={"q": "protein"}, headers=auth(user))
    assert [x["title"] for x in r.json()] == ["PROTEIN PANCAKES", "TACTICAL PROTEIN BOWL"]
    assert client.get("/api/v1/recipes/search", params={"q": " "}, headers=auth(user)).json() == []

    assert client.get("/api/v1/recipes/count", headers=auth(user)).json() == {"count": 3}


def test_filter_and_high_protein(client, make_profile, db):
    user = make_profile()
    _seed(db, "LEAN", calories=300, protein=40)
    _seed(db, "BULK", calories=900, protein=60)
    _seed(db, "LIGHT", calories=200, protein=10)

    r = client.get("/api/v1/recipes/filter", params={"min_protein": 30, "max_calories": 500}, headers=auth(user))
    assert [x["title"] for x in r.json()] == ["LEAN"]

    r = client.get("/api/v1/recipes/high-protein", headers=auth(user))
    assert [x["title"] for x in r.json()] == ["BULK", "LEAN"]


def test_get_recipe_respects_min_tier(client, make_profile, db):
    recruit = make_profile(tier=".223")
    operator = make_profile(tier=".762")
    gated = _seed(db, "SPECIAL FORCES SALMON", min_tier=".556")
    open_recipe = _seed(db, "COMBAT OATS")

    assert client.get(f"/api/v1/recipes/{gated['id']}", headers=auth(recruit)).status_code == 403
    assert client.get(f"/api/v1/recipes/{gated['id']}", headers=auth(operator)).status_code == 200
    assert client.get(f"/api/v1/recipes/{open_recipe['id']}", headers=auth(recruit)).status_code == 200
    assert client.get("/api/v1/recipes/missing", headers=auth(recruit)).status_code == 404


def test_update_and_delete(client, make_profile, db):
    coach = make_profile(role="coach", tier=None)
    recipe = _seed(db)

    r = client.put(f"/api/v1/recipes/{recipe['id']}", json={"protein": 25}, headers=auth(coach))
    assert r.status_code == 200
    assert r.json()["protein"] == 25
    assert r.json()["calories"] == 380

    assert client.delete(f"/api/v1/recipes/{recipe['id']}", headers=auth(coach)).status_code == 204
    assert client.delete(f"/api/v1/recipes/{recipe['id']}", headers=auth(coach)).status_code == 404
