"""Integration tests for the vehicle catalog endpoints."""

from datetime import date

from vehicle_rental.domain.enums import FuelType, Transmission, VehicleCategory, VehicleStatus

from tests.helpers import book, create_vehicle, set_status


def vehicle_payload(**overrides) -> dict:
    data = {
        "brand": "Toyota",
        "model": "Land Cruiser",
        "year": 2021,
        "category": "SUV",
        "daily_rate": 60000,
        "seats": 7,
        "transmission": "AUTOMATIC",
        "fuel_type": "DIESEL",
        "features": ["4x4", "GPS"],
        "license_plate": "CE-5678-B",
        "location": "Yaounde",
    }
    data.update(overrides)
    return data


async def test_catalog_is_public(client, vehicle):
    resp = await client.get("/api/v1/vehicles")

    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 1
    assert data["items"][0]["label"] == "Toyota Corolla 2022"
    assert data["items"][0]["features"] == ["Air conditioning"]


async def test_catalog_filters(client, session_factory):
    await create_vehicle(session_factory)
    await create_vehicle(
        session_factory,
        brand="Hyundai",
        model="H1",
        category=VehicleCategory.VAN,
        daily_rate=45000,
        seats=12,
        transmission=Transmission.MANUAL,
        fuel_type=FuelType.DIESEL,
        license_plate="LT-9012-C",
    )
    await create_vehicle(
        session_factory,
        model="Yaris",
        license_plate="LT-0000-Z",
        status=VehicleStatus.MAINTENANCE,
    )

    async def total(**params):
        resp = await client.get("/api/v1/vehicles", params=params)
        assert resp.status_code == 200, resp.text
        return resp.json()["total"]

    assert await total() == 3
    assert await total(category="VAN") == 1
    assert await total(transmission="MANUAL") == 1
    assert await total(fuel_type="PETROL") == 2
    assert await total(seats=7) == 1
    assert await total(max_price=30000) == 2
    assert await total(min_price=30000) == 1
    assert await total(available="true") == 2


async def test_catalog_pagination(client, session_factory):
    for i in range(3):
        await create_vehicle(session_factory, license_plate=f"LT-000{i}-P")

    resp = await client.get("/api/v1/vehicles", params={"page": 2, "page_size": 2})

    data = resp.json()
    assert data["total"] == 3
    assert len(data["items"]) == 1
    assert data["page"] == 2


async def test_get_vehicle(client, vehicle):
    resp = await client.get(f"/api/v1/vehicles/{vehicle.id}")

    assert resp.status_code == 200
    assert resp.json()["daily_rate"] == 25000


async def test_get_unknown_vehicle(client):
    resp = await client.get("/api/v1/vehicles/00000000-0000-0000-0000-000000000000")

    assert resp.status_code == 404


async def test_availability(client, customer_headers, admin_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))
    url = f"/api/v1/vehicles/{vehicle.id}/availability"

    before = await client.get(url, params={"start_date": "2026-06-02", "end_date": "2026-06-05"})
    assert before.json()["is_available"] is True

    await set_status(client, admin_headers, booking["id"], "CONFIRMED")

    after = await client.get(url, params={"start_date": "2026-06-02", "end_date": "2026-06-05"})
    assert after.json()["is_available"] is False
    assert after.json()["conflicts"][0]["booking_number"] == booking["booking_number"]

    adjacent = await client.get(url, params={"start_date": "2026-06-04", "end_date": "2026-06-05"})
    assert adjacent.json()["is_available"] is True


async def test_availability_rejects_reversed_dates(client, vehicle):
    resp = await client.get(
        f"/api/v1/vehicles/{vehicle.id}/availability",
        params={"start_date": "2026-06-05", "end_date": "2026-06-01"},
    )

    assert resp.status_code == 422


async def test_create_vehicle_admin_only(client, customer_headers):
    resp = await client.post("/api/v1/vehicles", json=vehicle_payload(), headers=customer_headers)

    assert resp.status_code == 403


async def test_create_vehicle(client, admin_headers):
    resp = await client.post("/api/v1/vehicles", json=vehicle_payload(), headers=admin_headers)

    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "AVAILABLE"
    assert resp.json()["label"] == "Toyota Land Cruiser 2021"


async def test_create_vehicle_duplicate_plate(client, admin_headers, vehicle):
    resp = await client.post(
        "/api/v1/vehicles", json=vehicle_payload(license_plate=vehicle.license_plate), headers=admin_headers
    )

    assert resp.status_code == 422


async def test_create_vehicle_rejects_non_positive_rate(client, admin_headers):
    resp = await client.post("/api/v1/vehicles", json=vehicle_payload(daily_rate=0), headers=admin_headers)

    assert resp.status_code == 422


async def test_rate_change_keeps_existing_booking_price(client, customer_headers, admin_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))

    resp = await client.patch(
        f"/api/v1/vehicles/{vehicle.id}", json={"daily_rate": 30000}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["daily_rate"] == 30000

    current = await client.get(f"/api/v1/bookings/{booking['id']}", headers=customer_headers)
    assert current.json()["total_price"] == 75000


async def test_delete_vehicle_with_confirmed_booking_refused(
    client, customer_headers, admin_headers, vehicle
):
    booking = await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))
    await set_status(client, admin_headers, booking["id"], "CONFIRMED")

    resp = await client.delete(f"/api/v1/vehicles/{vehicle.id}", headers=admin_headers)

    assert resp.status_code == 400


async def test_delete_vehicle_removes_its_bookings(client, customer_headers, admin_headers, vehicle):
    booking = await book(client, customer_headers, vehicle, date(2026, 6, 1), date(2026, 6, 4))

    resp = await client.delete(f"/api/v1/vehicles/{vehicle.id}", headers=admin_headers)

    assert resp.status_code == 204
    assert (await client.get(f"/api/v1/vehicles/{vehicle.id}")).status_code == 404
    gone = await client.get(f"/api/v1/bookings/{booking['id']}", headers=admin_headers)
    assert gone.status_code == 404
