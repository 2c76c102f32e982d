"""Integration tests for the bookings API endpoints."""

import re
from datetime import date

from sqlalchemy import select

from vehicle_rental.domain.enums import VehicleStatus
from vehicle_rental.models.notification import Notification

from tests.helpers import book, booking_payload, create_vehicle, set_status

JUNE_1 = date(2026, 6, 1)
JUNE_4 = date(2026, 6, 4)


async def test_create_booking_prices_from_daily_rate(client, customer, customer_headers, vehicle):
    data = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    assert data["total_days"] == 3
    assert data["daily_rate"] == 25000
    assert data["total_price"] == 75000
    assert data["currency"] == "XAF"
    assert data["status"] == "PENDING"
    assert data["payment_status"] is None
    assert data["user_id"] == str(customer.id)
    assert data["vehicle"]["label"] == "Toyota Corolla 2022"
    assert data["allowed_transitions"] == ["CANCELLED"]
    assert re.fullmatch(r"RENT-[A-Z0-9]{6}", data["booking_number"])


async def test_create_booking_notifies_customer(client, customer, customer_headers, vehicle, session_factory):
    data = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    async with session_factory() as session:
        result = await session.execute(
            select(Notification).where(Notification.user_id == customer.id)
        )
        notifications = result.scalars().all()
    assert [str(n.booking_id) for n in notifications] == [data["id"]]


async def test_create_booking_rejects_reversed_dates(client, customer_headers, vehicle):
    resp = await client.post(
        "/api/v1/bookings", json=booking_payload(vehicle, JUNE_4, JUNE_1), headers=customer_headers
    )

    assert resp.status_code == 422


async def test_create_booking_rejects_same_day(client, customer_headers, vehicle):
    resp = await client.post(
        "/api/v1/bookings", json=booking_payload(vehicle, JUNE_1, JUNE_1), headers=customer_headers
    )

    assert resp.status_code == 422


async def test_create_booking_unknown_vehicle(client, customer_headers, vehicle):
    payload = booking_payload(vehicle, JUNE_1, JUNE_4)
    payload["vehicle_id"] = "00000000-0000-0000-0000-000000000000"

    resp = await client.post("/api/v1/bookings", json=payload, headers=customer_headers)

    assert resp.status_code == 404


async def test_create_booking_vehicle_in_maintenance(client, customer_headers, session_factory):
    vehicle = await create_vehicle(session_factory, status=VehicleStatus.MAINTENANCE)

    resp = await client.post(
        "/api/v1/bookings", json=booking_payload(vehicle, JUNE_1, JUNE_4), headers=customer_headers
    )

    assert resp.status_code == 400


async def test_create_booking_requires_auth(client, vehicle):
    resp = await client.post("/api/v1/bookings", json=booking_payload(vehicle, JUNE_1, JUNE_4))

    assert resp.status_code in (401, 403)


async def test_past_dates_are_accepted(client, customer_headers, vehicle):
    data = await book(client, customer_headers, vehicle, date(2020, 1, 1), date(2020, 1, 3))

    assert data["total_days"] == 2


async def test_overlapping_confirmed_booking_blocks_new_booking(
    client, customer_headers, other_headers, admin_headers, vehicle
):
    first = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    assert (await set_status(client, admin_headers, first["id"], "CONFIRMED")).status_code == 200

    resp = await client.post(
        "/api/v1/bookings",
        json=booking_payload(vehicle, date(2026, 6, 3), date(2026, 6, 6)),
        headers=other_headers,
    )

    assert resp.status_code == 409
    assert resp.json()["code"] == "dates_not_available"


async def test_back_to_back_bookings_do_not_overlap(
    client, customer_headers, other_headers, admin_headers, vehicle
):
    first = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await set_status(client, admin_headers, first["id"], "CONFIRMED")

    second = await book(client, other_headers, vehicle, JUNE_4, date(2026, 6, 6))

    assert second["status"] == "PENDING"


async def test_pending_bookings_do_not_block_each_other(
    client, customer_headers, other_headers, admin_headers, vehicle
):
    first = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    second = await book(client, other_headers, vehicle, JUNE_1, JUNE_4)

    assert (await set_status(client, admin_headers, first["id"], "CONFIRMED")).status_code == 200
    resp = await set_status(client, admin_headers, second["id"], "CONFIRMED")

    assert resp.status_code == 409
    assert resp.json()["code"] == "dates_not_available"


async def test_admin_confirms_and_completes(client, customer_headers, admin_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    confirmed = await set_status(client, admin_headers, booking["id"], "CONFIRMED")
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "CONFIRMED"
    assert confirmed.json()["confirmed_at"] is not None
    assert sorted(confirmed.json()["allowed_transitions"]) == ["CANCELLED", "COMPLETED"]

    completed = await set_status(client, admin_headers, booking["id"], "COMPLETED")
    assert completed.status_code == 200
    assert completed.json()["completed_at"] is not None
    assert completed.json()["allowed_transitions"] == []


async def test_customer_cannot_confirm_own_booking(client, customer_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    resp = await set_status(client, customer_headers, booking["id"], "CONFIRMED")

    assert resp.status_code == 403
    current = await client.get(f"/api/v1/bookings/{booking['id']}", headers=customer_headers)
    assert current.json()["status"] == "PENDING"


async def test_customer_cancels_own_booking(client, customer_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    resp = await set_status(client, customer_headers, booking["id"], "CANCELLED")

    assert resp.status_code == 200
    assert resp.json()["status"] == "CANCELLED"
    assert resp.json()["cancelled_at"] is not None


async def test_cancelled_to_completed_is_refused_and_status_kept(
    client, customer_headers, admin_headers, vehicle
):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await set_status(client, admin_headers, booking["id"], "CANCELLED")

    resp = await set_status(client, admin_headers, booking["id"], "COMPLETED")

    assert resp.status_code == 409
    assert resp.json()["code"] == "invalid_status"
    current = await client.get(f"/api/v1/bookings/{booking['id']}", headers=admin_headers)
    assert current.json()["status"] == "CANCELLED"


async def test_admin_reopens_cancelled_booking(client, customer_headers, admin_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await set_status(client, admin_headers, booking["id"], "CANCELLED")

    resp = await set_status(client, admin_headers, booking["id"], "PENDING")

    assert resp.status_code == 200
    assert resp.json()["status"] == "PENDING"
    assert resp.json()["cancelled_at"] is None


async def test_other_customer_cannot_see_booking(client, customer_headers, other_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    resp = await client.get(f"/api/v1/bookings/{booking['id']}", headers=other_headers)

    assert resp.status_code == 403


async def test_unknown_booking(client, customer_headers):
    resp = await client.get(
        "/api/v1/bookings/00000000-0000-0000-0000-000000000000", headers=customer_headers
    )

    assert resp.status_code == 404


async def test_my_bookings_only_lists_own(client, customer_headers, other_headers, vehicle):
    mine = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await book(client, other_headers, vehicle, JUNE_1, JUNE_4)

    resp = await client.get("/api/v1/bookings/my-bookings", headers=customer_headers)

    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()] == [mine["id"]]


async def test_my_bookings_status_filter(client, customer_headers, vehicle):
    first = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await book(client, customer_headers, vehicle, date(2026, 7, 1), date(2026, 7, 2))
    await set_status(client, customer_headers, first["id"], "CANCELLED")

    resp = await client.get(
        "/api/v1/bookings/my-bookings", params={"status": "CANCELLED"}, headers=customer_headers
    )

    assert [b["id"] for b in resp.json()] == [first["id"]]


async def test_admin_list_requires_admin(client, customer_headers):
    resp = await client.get("/api/v1/bookings", headers=customer_headers)

    assert resp.status_code == 403


async def test_admin_list_and_filters(client, customer, customer_headers, other_headers, admin_headers, vehicle):
    await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await book(client, other_headers, vehicle, JUNE_1, JUNE_4)

    everything = await client.get("/api/v1/bookings", headers=admin_headers)
    assert everything.json()["total"] == 2

    only_customer = await client.get(
        "/api/v1/bookings", params={"user_id": str(customer.id)}, headers=admin_headers
    )
    assert only_customer.json()["total"] == 1
    assert only_customer.json()["items"][0]["user"]["email"] == customer.email


async def test_admin_creates_booking_for_customer(client, customer, admin_headers, vehicle):
    payload = {**booking_payload(vehicle, JUNE_1, JUNE_4), "user_id": str(customer.id)}

    resp = await client.post("/api/v1/bookings/admin-create", json=payload, headers=admin_headers)

    assert resp.status_code == 201
    assert resp.json()["user_id"] == str(customer.id)
    assert resp.json()["total_price"] == 75000


async def test_dashboard_stats(client, customer_headers, admin_headers, vehicle):
    first = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)
    await book(client, customer_headers, vehicle, date(2026, 7, 1), date(2026, 7, 2))
    await set_status(client, admin_headers, first["id"], "CONFIRMED")

    resp = await client.get("/api/v1/bookings/stats/dashboard", headers=admin_headers)

    assert resp.status_code == 200
    stats = resp.json()
    assert stats["total_vehicles"] == 1
    assert stats["available_vehicles"] == 1
    assert stats["total_bookings"] == 2
    assert stats["pending_bookings"] == 1
    assert stats["confirmed_bookings"] == 1
    assert stats["total_revenue"] == 75000
    assert len(stats["recent_bookings"]) == 2


async def test_admin_deletes_booking(client, customer_headers, admin_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, JUNE_1, JUNE_4)

    resp = await client.delete(f"/api/v1/bookings/{booking['id']}", headers=admin_headers)
    assert resp.status_code == 204

    gone = await client.get(f"/api/v1/bookings/{booking['id']}", headers=admin_headers)
    assert gone.status_code == 404
