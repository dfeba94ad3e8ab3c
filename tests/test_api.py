"""
HTTP-level tests: routing, authentication and error status mapping.
"""

import uuid

from tests.conftest import auth_headers


VENUE = {
    "name": "Harbor Hall",
    "address": "5 Pier Street",
    "city": "Boston",
    "state": "MA",
    "country": "USA",
    "postal_code": "02110",
    "is_public": True,
}


async def create_layout(client, headers):
    venue = (await client.post("/api/v1/venues", json=VENUE, headers=headers)).json()
    room = (await client.post(
        f"/api/v1/venues/{venue['id']}/rooms",
        json={"name": "Main Hall", "capacity": 100, "room_type": "banquet"},
        headers=headers,
    )).json()
    grid = await client.post(
        f"/api/v1/venues/{venue['id']}/rooms/{room['id']}/seats/grid",
        json={"start_row": "A", "end_row": "B", "start_number": 1, "end_number": 5},
        headers=headers,
    )
    assert grid.status_code == 201
    return venue, room, grid.json()["seats"]


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_missing_or_bad_token_is_401(client):
    assert (await client.get("/api/v1/venues")).status_code == 401

    response = await client.get("/api/v1/venues", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"]["error_code"] == "UNAUTHORIZED"


async def test_layout_and_public_listing(client, owner):
    headers = auth_headers(owner)
    venue, room, seats = await create_layout(client, headers)

    assert len(seats) == 10
    assert seats[0]["label"] == "A1"
    assert seats[6]["x"] == 1.2 and seats[6]["y"] == 1.2

    public = await client.get("/api/v1/venues/public")
    assert public.status_code == 200
    assert [v["id"] for v in public.json()] == [venue["id"]]

    listed = await client.get(f"/api/v1/venues/{venue['id']}/rooms/{room['id']}/seats", headers=headers)
    assert [s["label"] for s in listed.json()][:6] == ["A1", "A2", "A3", "A4", "A5", "B1"]


async def test_conflicts_are_409(client, owner):
    headers = auth_headers(owner)
    venue, room, _ = await create_layout(client, headers)

    duplicate_venue = await client.post("/api/v1/venues", json=VENUE, headers=headers)
    assert duplicate_venue.status_code == 409
    assert duplicate_venue.json()["error"]["error_code"] == "NAME_CONFLICT"

    duplicate_seat = await client.post(
        f"/api/v1/venues/{venue['id']}/rooms/{room['id']}/seats",
        json={"row": "A", "number": "3"},
        headers=headers,
    )
    assert duplicate_seat.status_code == 409
    assert duplicate_seat.json()["error"]["details"]["conflicting_seats"] == ["A3"]


async def test_not_found_forbidden_and_invalid_state(client, owner, other_user):
    headers = auth_headers(owner)
    venue, room, _ = await create_layout(client, headers)

    missing = await client.get(f"/api/v1/venues/{uuid.uuid4()}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["details"]["resource_type"] == "venue"

    foreign = await client.get(f"/api/v1/venues/{venue['id']}", headers=auth_headers(other_user))
    assert foreign.status_code == 403

    non_empty = await client.delete(f"/api/v1/venues/{venue['id']}", headers=headers)
    assert non_empty.status_code == 400
    assert non_empty.json()["error"]["error_code"] == "HAS_CHILDREN"

    wrong_venue = await client.get(f"/api/v1/venues/{uuid.uuid4()}/rooms/{room['id']}", headers=headers)
    assert wrong_venue.status_code == 404


async def test_manual_occupied_status_is_rejected_by_schema(client, owner):
    headers = auth_headers(owner)
    venue, room, seats = await create_layout(client, headers)

    response = await client.patch(
        f"/api/v1/venues/{venue['id']}/rooms/{room['id']}/seats/{seats[0]['id']}",
        json={"status": "occupied"},
        headers=headers,
    )
    assert response.status_code == 422


async def test_seating_flow(client, owner, other_user, event, guests):
    headers = auth_headers(owner)
    _, _, seats = await create_layout(client, headers)
    base = f"/api/v1/events/{event.id}/seating"

    assigned = await client.post(
        f"{base}/assign",
        json={"guest_id": str(guests[0].id), "seat_id": seats[0]["id"], "notes": "Aisle"},
        headers=headers,
    )
    assert assigned.status_code == 201
    assert assigned.json()["seat"]["status"] == "occupied"

    taken = await client.post(
        f"{base}/assign",
        json={"guest_id": str(guests[1].id), "seat_id": seats[0]["id"]},
        headers=headers,
    )
    assert taken.status_code == 409
    assert taken.json()["error"]["error_code"] == "SEAT_OCCUPIED"

    twice = await client.post(
        f"{base}/assign",
        json={"guest_id": str(guests[0].id), "seat_id": seats[1]["id"]},
        headers=headers,
    )
    assert twice.status_code == 409
    assert twice.json()["error"]["error_code"] == "GUEST_ALREADY_ASSIGNED"

    moved = await client.patch(
        f"{base}/assignments/{assigned.json()['id']}",
        json={"seat_id": seats[1]["id"]},
        headers=headers,
    )
    assert moved.status_code == 200
    assert moved.json()["seat_id"] == seats[1]["id"]

    chart = (await client.get(f"{base}/chart", headers=headers)).json()
    assert (chart["total_seats"], chart["assigned_seats"], chart["available_seats"]) == (10, 1, 9)
    assert chart["room_name"] == "Main Hall"

    released = await client.delete(f"{base}/assign/{seats[1]['id']}", headers=headers)
    assert released.status_code == 204

    again = await client.delete(f"{base}/assign/{seats[1]['id']}", headers=headers)
    assert again.status_code == 404

    foreign = await client.get(f"{base}/chart", headers=auth_headers(other_user))
    assert foreign.status_code == 403
    assert foreign.json()["error"]["error_code"] == "FORBIDDEN"

