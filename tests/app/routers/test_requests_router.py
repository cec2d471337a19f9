"""Tests for the requests router."""

from uuid import uuid4


def test_send_request_by_texting_id(client, as_user, setup_user_a, setup_user_b):
    r = client.post("/requests", json={"target": "abcd-1234"}, headers=as_user("uid-alice"))
    assert r.status_code == 201
    data = r.json()
    assert data["from"] == "uid-alice"
    assert data["to"] == "uid-bob"
    assert data["status"] == "pending"


def test_send_request_errors(client, as_user, setup_user_a, setup_pending_request):
    r = client.post("/requests", json={"target": "zzzz-0000"}, headers=as_user("uid-alice"))
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"

    r = client.post("/requests", json={"target": "Alice"}, headers=as_user("uid-alice"))
    assert r.status_code == 400
    assert r.json()["code"] == "self_target"

    r = client.post("/requests", json={"target": "Alice"}, headers=as_user("uid-bob"))
    assert r.status_code == 409
    assert r.json()["code"] == "already_connected"


def test_list_incoming_and_outgoing(client, as_user, setup_pending_request):
    r = client.get("/requests/incoming", headers=as_user("uid-bob"))
    assert r.status_code == 200
    items = r.json()["items"]
    assert [i["id"] for i in items] == [str(setup_pending_request.id)]
    assert items[0]["counterpart"]["display_name"] == "Alice"

    r = client.get("/requests/outgoing", headers=as_user("uid-alice"))
    items = r.json()["items"]
    assert [i["to"] for i in items] == ["uid-bob"]
    assert r.json()["total"] == 1


def test_accept_request(client, as_user, setup_pending_request):
    r = client.post(
        f"/requests/{setup_pending_request.id}/respond",
        json={"decision": "accepted"},
        headers=as_user("uid-bob"),
    )
    assert r.status_code == 200
    conversation_id = r.json()["conversation_id"]
    assert conversation_id is not None

    r = client.get("/conversations", headers=as_user("uid-alice"))
    items = r.json()["items"]
    assert [i["id"] for i in items] == [conversation_id]
    assert items[0]["preview"] == "Chat request accepted!"
    assert client.get("/requests/incoming", headers=as_user("uid-bob")).json()["items"] == []


def test_respond_not_authorized(client, as_user, setup_pending_request):
    r = client.post(
        f"/requests/{setup_pending_request.id}/respond",
        json={"decision": "accepted"},
        headers=as_user("uid-alice"),
    )
    assert r.status_code == 403
    assert r.json()["code"] == "not_authorized"


def test_respond_missing_request(client, as_user, setup_user_b):
    r = client.post(
        f"/requests/{uuid4()}/respond", json={"decision": "denied"}, headers=as_user("uid-bob")
    )
    assert r.status_code == 404


def test_cancel_request(client, as_user, setup_pending_request):
    r = client.delete(f"/requests/{setup_pending_request.id}", headers=as_user("uid-alice"))
    assert r.status_code == 204
    # Already gone: still succeeds
    r = client.delete(f"/requests/{setup_pending_request.id}", headers=as_user("uid-alice"))
    assert r.status_code == 204


def test_incoming_skips_senders_without_lookup(client, as_user, db, setup_pending_request):
    from app.models.user import UserLookup

    db.query(UserLookup).filter(UserLookup.uid == "uid-alice").delete()
    db.commit()
    r = client.get("/requests/incoming", headers=as_user("uid-bob"))
    assert r.status_code == 200
    assert r.json()["items"] == []
    assert r.json()["total"] == 0


def test_respond_with_unknown_decision(client, as_user, setup_pending_request):
    r = client.post(
        f"/requests/{setup_pending_request.id}/respond",
        json={"decision": "accept"},
        headers=as_user("uid-bob"),
    )
    assert r.status_code == 422
    r = client.get("/requests/incoming", headers=as_user("uid-bob"))
    assert r.json()["total"] == 1
