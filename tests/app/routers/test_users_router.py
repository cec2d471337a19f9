"""Tests for the users router."""


def test_create_profile(client, as_user, faker):
    name = faker.name()
    r = client.post("/users/me", json={"display_name": name}, headers=as_user("uid-new"))
    assert r.status_code == 201
    data = r.json()
    assert data["uid"] == "uid-new"
    assert data["display_name"] == name
    assert data["visibility"] == "private"
    assert data["chat_filters"] == {"block_links": False, "block_profanity": False}


def test_create_profile_twice_returns_existing(client, as_user, setup_user_a):
    r = client.post("/users/me", json={"display_name": "Other"}, headers=as_user("uid-alice"))
    assert r.status_code == 200
    assert r.json()["display_name"] == "Alice"


def test_missing_caller_header(client):
    r = client.get("/users/me")
    assert r.status_code == 401


def test_get_profile_not_found(client, as_user):
    r = client.get("/users/me", headers=as_user("uid-nobody"))
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"


def test_update_profile(client, as_user, setup_user_a):
    r = client.patch(
        "/users/me", json={"display_name": "Alicia"}, headers=as_user("uid-alice")
    )
    assert r.status_code == 200
    assert r.json()["display_name"] == "Alicia"


def test_set_texting_id_taken(client, as_user, setup_user_a, setup_user_b):
    r = client.put(
        "/users/me/texting-id", json={"texting_id": "abcd-1234"}, headers=as_user("uid-alice")
    )
    assert r.status_code == 409
    assert r.json()["code"] == "texting_id_taken"


def test_set_texting_id_invalid(client, as_user, setup_user_a):
    r = client.put(
        "/users/me/texting-id", json={"texting_id": "nope"}, headers=as_user("uid-alice")
    )
    assert r.status_code == 422


def test_set_chat_filters(client, as_user, setup_user_a):
    r = client.put(
        "/users/me/chat-filters",
        json={"block_links": True, "block_profanity": True},
        headers=as_user("uid-alice"),
    )
    assert r.status_code == 200
    assert r.json()["chat_filters"] == {"block_links": True, "block_profanity": True}


def test_search_users(client, as_user, setup_user_a, setup_user_b, setup_user_c):
    r = client.get("/users/search", params={"q": "B"}, headers=as_user("uid-alice"))
    assert r.status_code == 200
    assert [u["uid"] for u in r.json()] == ["uid-bob"]
    r = client.get("/users/search", params={"q": "Car"}, headers=as_user("uid-alice"))
    assert r.json() == []
