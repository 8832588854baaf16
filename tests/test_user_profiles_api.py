from .conftest import ADMIN_ID, USER_ID, headers

NEW_USER = headers("user-new")


def test_create_profile(client):
    response = client.post("/user_profiles/", json={"name": "  Diego ", "phone": "555"}, headers=NEW_USER)

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == "user-new"
    assert body["name"] == "Diego"
    assert body["role"] == "USER"


def test_role_cannot_be_self_assigned(client):
    response = client.post("/user_profiles/", json={"name": "Eve", "role": "ADMIN"}, headers=NEW_USER)

    assert response.status_code == 201
    assert response.json()["role"] == "USER"


def test_profile_is_created_once(client, profiles):
    response = client.post("/user_profiles/", json={"name": "Ana"}, headers=headers(USER_ID))
    assert response.status_code == 409


def test_blank_name_is_rejected(client):
    assert client.post("/user_profiles/", json={"name": "   "}, headers=NEW_USER).status_code == 422


def test_anonymous_has_no_profile(client):
    assert client.get("/user_profiles/me").status_code == 401


def test_get_my_profile(client, profiles):
    response = client.get("/user_profiles/me", headers=headers(ADMIN_ID))

    assert response.status_code == 200
    assert response.json()["name"] == "Carla"
    assert response.json()["role"] == "ADMIN"


def test_missing_profile(client):
    assert client.get("/user_profiles/me", headers=NEW_USER).status_code == 404


def test_update_my_profile(client, profiles):
    response = client.patch("/user_profiles/me", json={"phone": "999", "name": None}, headers=headers(USER_ID))

    assert response.status_code == 200
    assert response.json()["phone"] == "999"
    assert response.json()["name"] == "Ana"


def test_update_ignores_role(client, profiles):
    response = client.patch("/user_profiles/me", json={"role": "ADMIN"}, headers=headers(USER_ID))

    assert response.status_code == 200
    assert response.json()["role"] == "USER"
