"""Leaving footprints explicitly."""


def test_leave_footprint_geocodes_place(client, trip, no_geocoding):
    resp = client.post(f"/trips/{trip['id']}/footprints/", json={"lat": 41.4, "lng": 2.15, "accuracy_m": 9.5})

    assert resp.status_code == 201
    body = resp.json()
    assert body["place_text"] == "Gràcia, Barcelona"
    assert body["moment_id"] is None
    no_geocoding.assert_awaited_once_with(41.4, 2.15)


def test_given_place_text_skips_geocoding(client, trip, no_geocoding):
    resp = client.post(
        f"/trips/{trip['id']}/footprints/",
        json={"lat": 41.4, "lng": 2.15, "place_text": "Park Güell"},
    )

    assert resp.json()["place_text"] == "Park Güell"
    no_geocoding.assert_not_awaited()


def test_footprint_without_place(client, trip, no_geocoding):
    no_geocoding.return_value = None

    resp = client.post(f"/trips/{trip['id']}/footprints/", json={"lat": 41.4, "lng": 2.15})

    assert resp.status_code == 201
    assert resp.json()["place_text"] is None


def test_invalid_coordinates(client, trip):
    resp = client.post(f"/trips/{trip['id']}/footprints/", json={"lat": 123.0, "lng": 2.15})
    assert resp.status_code == 422


def test_ended_trip_refuses_footprints(client, trip):
    client.patch(f"/trips/{trip['id']}/status", json={"status": "ended"})

    resp = client.post(f"/trips/{trip['id']}/footprints/", json={"lat": 41.4, "lng": 2.15})

    assert resp.status_code == 409


def test_list_and_delete(client, trip):
    first = client.post(
        f"/trips/{trip['id']}/footprints/",
        json={"lat": 1, "lng": 1, "created_at": "2024-06-01T10:00:00Z"},
    ).json()
    second = client.post(
        f"/trips/{trip['id']}/footprints/",
        json={"lat": 2, "lng": 2, "created_at": "2024-06-01T11:00:00Z"},
    ).json()

    listed = client.get(f"/trips/{trip['id']}/footprints/").json()
    assert [f["id"] for f in listed] == [second["id"], first["id"]]

    assert client.delete(f"/trips/{trip['id']}/footprints/{first['id']}").status_code == 204
    assert [f["id"] for f in client.get(f"/trips/{trip['id']}/footprints/").json()] == [second["id"]]
    assert client.delete(f"/trips/{trip['id']}/footprints/{first['id']}").status_code == 404
