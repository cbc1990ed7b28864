"""Journeys and users."""


def test_create_user_conflict(client, user):
    resp = client.post("/users/", json={"id": "uid-other", "email": "ana@example.com"})
    assert resp.status_code == 409


def test_get_user(client, user):
    assert client.get("/users/uid-ana").json()["email"] == "ana@example.com"
    assert client.get("/users/nobody").status_code == 404


def test_new_trip_is_active(client, trip):
    assert trip["status"] == "active"
    assert trip["title"] == "Pyrenees 2026"


def test_trip_owner_must_exist(client):
    resp = client.post("/trips/", json={"title": "Ghost trip", "owner_id": "nobody"})
    assert resp.status_code == 404


def test_trip_title_required(client, user):
    resp = client.post("/trips/", json={"title": "", "owner_id": user["id"]})
    assert resp.status_code == 422


def test_end_and_reopen(client, trip):
    ended = client.patch(f"/trips/{trip['id']}/status", json={"status": "ended"})
    assert ended.json()["status"] == "ended"

    reopened = client.patch(f"/trips/{trip['id']}/status", json={"status": "active"})
    assert reopened.json()["status"] == "active"


def test_bad_status(client, trip):
    resp = client.patch(f"/trips/{trip['id']}/status", json={"status": "paused"})
    assert resp.status_code == 422


def test_list_filters_by_owner_and_status(client, user, trip):
    client.post("/users/", json={"id": "uid-bo", "email": "bo@example.com"})
    client.post("/trips/", json={"title": "Bo's trip", "owner_id": "uid-bo"})
    done = client.post("/trips/", json={"title": "Camino 2025", "owner_id": user["id"]}).json()
    client.patch(f"/trips/{done['id']}/status", json={"status": "ended"})

    active = client.get("/trips/", params={"owner_id": user["id"], "status": "active"}).json()
    ended = client.get("/trips/", params={"owner_id": user["id"], "status": "ended"}).json()

    assert [t["title"] for t in active] == ["Pyrenees 2026"]
    assert [t["title"] for t in ended] == ["Camino 2025"]
    assert len(client.get("/trips/").json()) == 3


def test_update_trip(client, trip):
    resp = client.put(f"/trips/{trip['id']}", json={"title": "Pyrenees, east to west", "description": "GR11"})

    assert resp.status_code == 200
    assert resp.json()["description"] == "GR11"


def test_delete_trip_removes_journal(client, trip, db_session):
    from models.Footprint import Footprint
    from models.Moment import Moment

    client.post(
        f"/trips/{trip['id']}/moments/",
        json={"author_id": "uid-ana", "text": "x", "location": {"lat": 1, "lng": 1}},
    )

    assert client.delete(f"/trips/{trip['id']}").status_code == 204
    assert client.get(f"/trips/{trip['id']}").status_code == 404
    assert db_session.query(Moment).count() == 0
    assert db_session.query(Footprint).count() == 0
