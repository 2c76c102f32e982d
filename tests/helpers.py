"""Builders and request helpers shared by the API tests."""

from datetime import date

from vehicle_rental.core.security import create_tokens, get_password_hash
from vehicle_rental.domain.enums import (
    FuelType,
    Transmission,
    UserRole,
    UserStatus,
    VehicleCategory,
)
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle

PASSWORD = "Test@1234"

CARD = {
    "card_holder": "Amina Nkongho",
    "expiry": "12/30",
    "cvv": "123",
}
ACCEPTED_CARD = "4242424242421111"
DECLINED_CARD = "4242424242420002"


async def create_user(
    session_factory,
    email: str,
    role: UserRole = UserRole.USER,
    status: UserStatus = UserStatus.ACTIVE,
    first_name: str = "Test",
    last_name: str = "User",
) -> User:
    async with session_factory() as session:
        user = User(
            email=email,
            password_hash=get_password_hash(PASSWORD),
            role=role,
            status=status,
            first_name=first_name,
            last_name=last_name,
        )
        session.add(user)
        await session.commit()
        return user


async def create_vehicle(session_factory, **overrides) -> Vehicle:
    data = {
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2022,
        "category": VehicleCategory.ECONOMY,
        "daily_rate": 25000,
        "seats": 5,
        "transmission": Transmission.AUTOMATIC,
        "fuel_type": FuelType.PETROL,
        "features": ["Air conditioning"],
        "license_plate": "LT-1234-A",
        "location": "Douala",
    }
    data.update(overrides)
    async with session_factory() as session:
        vehicle = Vehicle(**data)
        session.add(vehicle)
        await session.commit()
        return vehicle


def auth_headers(user: User) -> dict[str, str]:
    tokens = create_tokens(str(user.id), user.email, user.role.value)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


def booking_payload(vehicle, start: date, end: date) -> dict:
    return {
        "vehicle_id": str(vehicle.id),
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
    }


async def book(client, headers, vehicle, start: date, end: date) -> dict:
    resp = await client.post(
        "/api/v1/bookings", json=booking_payload(vehicle, start, end), headers=headers
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def set_status(client, headers, booking_id: str, status: str):
    return await client.patch(
        f"/api/v1/bookings/{booking_id}/status", json={"status": status}, headers=headers
    )


async def pay(client, headers, booking_id: str, card_number: str = ACCEPTED_CARD):
    return await client.post(
        "/api/v1/payments/process",
        json={"booking_id": booking_id, "card_number": card_number, **CARD},
        headers=headers,
    )
