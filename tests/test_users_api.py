from taskboard.models import Activity, Task, User, UserRole
from taskboard.utils.security import verify_password


def test_list_users(make_user, login):
    make_user("alice")
    make_user("bob")

    users = login("alice").get("/users").json()["users"]

    assert {u["username"] for u in users} == {"alice", "bob"}
    assert all("hashedPassword" not in u for u in users)


def test_manager_creates_user(db, make_user, login):
    make_user("mia", role=UserRole.DEPARTMENT_MANAGER)

    response = login("mia").post("/users", json={
        "username": "newbie",
        "password": "pw123456",
        "name": "New Person",
        "department": "ELECTRICAL",
    })

    assert response.status_code == 201
    created = response.json()["user"]
    assert created["role"] == "EMPLOYEE"
    assert created["isActive"] is True
    stored = db.query(User).filter(User.username == "newbie").one()
    assert stored.hashed_password != "pw123456"
    assert verify_password("pw123456", stored.hashed_password)


def test_employee_cannot_create_user(make_user, login):
    make_user("erin")
    response = login("erin").post("/users", json={"username": "x", "password": "y", "name": "z"})
    assert response.status_code == 403


def test_duplicate_username_is_rejected(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    make_user("taken")

    response = login("admin").post("/users", json={"username": "taken", "password": "pw", "name": "Dup"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"


def test_create_user_requires_fields(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    assert login("admin").post("/users", json={"username": "only"}).status_code == 400


def test_admin_cannot_delete_self(make_user, login):
    admin = make_user("admin", role=UserRole.ADMIN)
    response = login("admin").delete(f"/users/{admin.id}")
    assert response.status_code == 400


def test_only_admin_deletes_users(make_user, login):
    make_user("carl", role=UserRole.COORDINATOR)
    target = make_user("target")
    assert login("carl").delete(f"/users/{target.id}").status_code == 403


def test_admin_deletes_user_and_keeps_activity(db, make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    target = make_user("target")
    admin = login("admin")
    target_client = login("target")
    task = admin.post("/tasks", json={
        "title": "Assigned", "department": "CIVIL", "assigneeId": target.id,
    }).json()["task"]
    target_client.put(f"/tasks/{task['id']}", json={"status": "IN_PROGRESS"})

    response = admin.delete(f"/users/{target.id}")

    assert response.status_code == 200
    db.expire_all()
    assert db.query(User).filter(User.username == "target").count() == 0
    assert db.query(Task).filter(Task.id == task["id"]).one().assignee_id is None
    # the status change made by the deleted user survives without its author
    orphaned = db.query(Activity).filter(Activity.user_id.is_(None)).all()
    assert len(orphaned) == 1
    assert target_client.get("/auth/me").status_code == 401


def test_user_with_created_tasks_cannot_be_deleted(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    author = make_user("author")
    login("author").post("/tasks", json={"title": "Mine", "department": "CIVIL"})

    response = login("admin").delete(f"/users/{author.id}")
    assert response.status_code == 400


def test_delete_unknown_user_is_404(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    assert login("admin").delete("/users/999").status_code == 404


def test_only_admin_toggles_active(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    make_user("carl", role=UserRole.COORDINATOR)
    target = make_user("target")

    forbidden = login("carl").put(f"/users/{target.id}", json={"isActive": False})
    assert forbidden.status_code == 403

    allowed = login("admin").put(f"/users/{target.id}", json={"isActive": False})
    assert allowed.status_code == 200
    assert allowed.json()["user"]["isActive"] is False


def test_coordinator_updates_profile_fields(make_user, login):
    make_user("carl", role=UserRole.COORDINATOR)
    target = make_user("target")

    response = login("carl").put(f"/users/{target.id}", json={
        "name": "Renamed", "department": "MECHANICAL", "password": "",
    })

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Renamed"
    assert response.json()["user"]["department"] == "MECHANICAL"


def test_employee_changes_own_password(db, make_user, login):
    erin = make_user("erin")
    client = login("erin")

    response = client.put(f"/users/{erin.id}", json={"password": "brand-new"})

    assert response.status_code == 200
    db.expire_all()
    assert verify_password("brand-new", db.get(User, erin.id).hashed_password)
    login("erin", password="brand-new")


def test_employee_cannot_edit_own_role(make_user, login):
    erin = make_user("erin")
    response = login("erin").put(f"/users/{erin.id}", json={"role": "ADMIN"})
    assert response.status_code == 403


def test_employee_cannot_change_other_password(make_user, login):
    make_user("erin")
    other = make_user("other")
    response = login("erin").put(f"/users/{other.id}", json={"password": "hijack"})
    assert response.status_code == 403


def test_update_unknown_user_is_404(make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    assert login("admin").put("/users/999", json={"name": "x"}).status_code == 404


def test_null_is_active_is_ignored(db, make_user, login):
    make_user("admin", role=UserRole.ADMIN)
    target = make_user("target")

    response = login("admin").put(f"/users/{target.id}", json={"isActive": None, "name": "Still Here"})

    assert response.status_code == 200
    assert response.json()["user"]["isActive"] is True
    assert response.json()["user"]["name"] == "Still Here"
    db.expire_all()
    assert db.get(User, target.id).is_active is True


def test_null_is_active_alone_needs_no_admin(make_user, login):
    make_user("carl", role=UserRole.COORDINATOR)
    target = make_user("target")

    response = login("carl").put(f"/users/{target.id}", json={"isActive": None})

    assert response.status_code == 200
    assert response.json()["user"]["isActive"] is True
