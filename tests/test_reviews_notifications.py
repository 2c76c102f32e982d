"""Integration tests for reviews and in-app notifications."""

from datetime import date

from tests.helpers import book, set_status


async def completed_booking(client, customer_headers, admin_headers, vehicle) -> dict:
    booking = await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))
    await set_status(client, admin_headers, booking["id"], "CONFIRMED")
    resp = await set_status(client, admin_headers, booking["id"], "COMPLETED")
    assert resp.status_code == 200, resp.text
    return resp.json()


async def review(client, headers, booking_id: str, rating: int = 5):
    return await client.post(
        "/api/v1/reviews",
        json={"booking_id": booking_id, "rating": rating, "comment": "Clean car, smooth pickup"},
        headers=headers,
    )


async def test_review_completed_booking(client, customer_headers, admin_headers, vehicle):
    booking = await completed_booking(client, customer_headers, admin_headers, vehicle)

    resp = await review(client, customer_headers, booking["id"], rating=4)

    assert resp.status_code == 201, resp.text
    assert resp.json()["rating"] == 4
    assert resp.json()["reviewer_name"] == "Amina Nkongho"

    listing = await client.get(f"/api/v1/reviews/vehicles/{vehicle.id}")
    data = listing.json()
    assert data["total"] == 1
    assert data["average_rating"] == 4.0
    assert data["rating_breakdown"]["4"] == 1


async def test_review_requires_completed_booking(client, customer_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))

    resp = await review(client, customer_headers, booking["id"])

    assert resp.status_code == 409


async def test_review_only_once(client, customer_headers, admin_headers, vehicle):
    booking = await completed_booking(client, customer_headers, admin_headers, vehicle)
    await review(client, customer_headers, booking["id"])

    resp = await review(client, customer_headers, booking["id"])

    assert resp.status_code == 422


async def test_review_someone_elses_booking(client, customer_headers, other_headers, admin_headers, vehicle):
    booking = await completed_booking(client, customer_headers, admin_headers, vehicle)

    resp = await review(client, other_headers, booking["id"])

    assert resp.status_code == 403


async def test_review_rating_range(client, customer_headers, admin_headers, vehicle):
    booking = await completed_booking(client, customer_headers, admin_headers, vehicle)

    resp = await review(client, customer_headers, booking["id"], rating=6)

    assert resp.status_code == 422


async def test_status_changes_create_notifications(client, customer_headers, admin_headers, vehicle):
    await completed_booking(client, customer_headers, admin_headers, vehicle)

    resp = await client.get("/api/v1/notifications", headers=customer_headers)

    assert resp.status_code == 200
    data = resp.json()
    # created, confirmed, completed
    assert data["total"] == 3
    assert data["unread_count"] == 3
    assert {n["notification_type"] for n in data["notifications"]} == {"BOOKING_CREATED", "BOOKING_STATUS"}


async def test_mark_read(client, customer_headers, vehicle):
    await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))
    notification = (await client.get("/api/v1/notifications", headers=customer_headers)).json()["notifications"][0]

    resp = await client.patch(f"/api/v1/notifications/{notification['id']}/read", headers=customer_headers)
    assert resp.status_code == 204

    data = (await client.get("/api/v1/notifications", headers=customer_headers)).json()
    assert data["unread_count"] == 0
    assert data["notifications"][0]["read_at"] is not None


async def test_cannot_mark_someone_elses_notification(client, customer_headers, other_headers, vehicle):
    await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))
    notification = (await client.get("/api/v1/notifications", headers=customer_headers)).json()["notifications"][0]

    resp = await client.patch(f"/api/v1/notifications/{notification['id']}/read", headers=other_headers)

    assert resp.status_code == 404


async def test_mark_all_read_and_unread_filter(client, customer_headers, admin_headers, vehicle):
    await completed_booking(client, customer_headers, admin_headers, vehicle)

    resp = await client.post("/api/v1/notifications/read-all", headers=customer_headers)
    assert resp.status_code == 204

    unread = await client.get(
        "/api/v1/notifications", params={"unread_only": "true"}, headers=customer_headers
    )
    assert unread.json()["total"] == 0
    assert unread.json()["unread_count"] == 0


async def test_notifications_are_paginated_newest_first(client, customer_headers, admin_headers, vehicle):
    await completed_booking(client, customer_headers, admin_headers, vehicle)

    resp = await client.get(
        "/api/v1/notifications", params={"page": 2, "page_size": 2}, headers=customer_headers
    )

    data = resp.json()
    assert data["total"] == 3
    assert data["page"] == 2
    assert len(data["notifications"]) == 1
