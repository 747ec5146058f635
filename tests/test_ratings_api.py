from taskboard.models import Activity, ActivityAction, TaskRating


def _task(user_client):
    return user_client.post("/tasks", json={"title": "Rate me", "department": "MECHANICAL"}).json()["task"]


def test_resubmitting_overwrites_rating(db, make_user, login):
    make_user("erin")
    erin = login("erin")
    task = _task(erin)

    first = erin.post("/ratings", json={"taskId": task["id"], "rating": 2, "comment": "meh"})
    second = erin.post("/ratings", json={"taskId": task["id"], "rating": 5})

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["rating"]["id"] == first.json()["rating"]["id"]
    assert second.json()["rating"]["rating"] == 5
    assert second.json()["rating"]["comment"] is None

    db.expire_all()
    assert db.query(TaskRating).count() == 1
    rating_activities = db.query(Activity).filter(Activity.action == ActivityAction.RATING).all()
    assert [a.details for a in rating_activities] == ["Rated 2 stars"]


def test_rating_out_of_range_is_rejected(db, make_user, login):
    make_user("erin")
    erin = login("erin")
    task = _task(erin)

    for value in (0, 6, -1):
        response = erin.post("/ratings", json={"taskId": task["id"], "rating": value})
        assert response.status_code == 400
    assert erin.post("/ratings", json={"taskId": task["id"]}).status_code == 400

    db.expire_all()
    assert db.query(TaskRating).count() == 0


def test_rating_unknown_task_is_404(make_user, login):
    make_user("erin")
    assert login("erin").post("/ratings", json={"taskId": 77, "rating": 3}).status_code == 404


def test_ratings_listing_and_average(make_user, login):
    make_user("erin")
    make_user("fred")
    erin = login("erin")
    task = _task(erin)
    erin.post("/ratings", json={"taskId": task["id"], "rating": 4})
    login("fred").post("/ratings", json={"taskId": task["id"], "rating": 1})

    response = erin.get("/ratings", params={"taskId": task["id"]})

    assert response.status_code == 200
    body = response.json()
    assert len(body["ratings"]) == 2
    assert body["avgRating"] == 2.5


def test_unrated_task_averages_zero(make_user, login):
    make_user("erin")
    erin = login("erin")
    task = _task(erin)

    body = erin.get("/ratings", params={"taskId": task["id"]}).json()
    assert body == {"ratings": [], "avgRating": 0}


def test_ratings_listing_requires_task_id(make_user, login):
    make_user("erin")
    assert login("erin").get("/ratings").status_code == 400
