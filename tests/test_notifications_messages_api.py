from taskboard.models import Notification, UserRole
from taskboard.utils.notifications import notify


def test_notifications_are_scoped_to_current_user(db, make_user, login):
    alice = make_user("alice")
    bob = make_user("bob")
    notify(db, alice.id, "Hello", "for alice")
    notify(db, bob.id, "Hello", "for bob")
    db.commit()

    body = login("alice").get("/notifications").json()

    assert [n["message"] for n in body["notifications"]] == ["for alice"]
    assert body["unreadCount"] == 1
    assert body["notifications"][0]["isRead"] is False


def test_read_all_is_idempotent(db, make_user, login):
    alice = make_user("alice")
    for i in range(3):
        notify(db, alice.id, "Ping", f"ping {i}")
    db.commit()
    client = login("alice")

    assert client.post("/notifications/read-all").json() == {"success": True}
    assert client.post("/notifications/read-all").json() == {"success": True}

    body = client.get("/notifications").json()
    assert body["unreadCount"] == 0
    assert all(n["isRead"] for n in body["notifications"])


def test_mark_single_notification_read(db, make_user, login):
    alice = make_user("alice")
    first = notify(db, alice.id, "One", "first")
    notify(db, alice.id, "Two", "second")
    db.commit()
    client = login("alice")

    response = client.post(f"/notifications/{first.id}/read")

    assert response.status_code == 200
    assert client.get("/notifications").json()["unreadCount"] == 1


def test_cannot_mark_someone_elses_notification(db, make_user, login):
    make_user("alice")
    bob = make_user("bob")
    note = notify(db, bob.id, "Private", "for bob")
    db.commit()

    response = login("alice").post(f"/notifications/{note.id}/read")

    assert response.status_code == 404
    db.expire_all()
    assert db.get(Notification, note.id).is_read is False


def test_send_and_read_conversation(make_user, login):
    alice = make_user("alice")
    bob = make_user("bob", role=UserRole.COORDINATOR)
    alice_client = login("alice")
    bob_client = login("bob")

    sent = alice_client.post("/messages", json={"receiverId": bob.id, "content": "Hi Bob"})
    assert sent.status_code == 200
    assert sent.json()["message"]["sender"]["username"] == "alice"
    bob_client.post("/messages", json={"receiverId": alice.id, "content": "Hi Alice"})

    conversation = alice_client.get("/messages", params={"userId": bob.id}).json()
    assert [m["content"] for m in conversation["messages"]] == ["Hi Bob", "Hi Alice"]
    assert conversation["unreadCount"] == 1

    inbox = bob_client.get("/messages").json()
    assert [m["content"] for m in inbox["messages"]] == ["Hi Alice", "Hi Bob"]
    assert inbox["unreadCount"] == 1


def test_mark_messages_read_from_sender(make_user, login):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_client = login("alice")
    bob_client = login("bob")
    alice_client.post("/messages", json={"receiverId": bob.id, "content": "one"})
    alice_client.post("/messages", json={"receiverId": bob.id, "content": "two"})

    response = bob_client.put("/messages", json={"senderId": alice.id})

    assert response.json() == {"success": True}
    assert bob_client.get("/messages").json()["unreadCount"] == 0
    assert bob_client.put("/messages", json={}).status_code == 400


def test_message_validation(make_user, login):
    make_user("alice")
    client = login("alice")
    assert client.post("/messages", json={"content": "nobody"}).status_code == 400
    assert client.post("/messages", json={"receiverId": 999, "content": "lost"}).status_code == 404
