#!/usr/bin/env python3
"""Seed a development database with a demo customer and a small fleet.

Usage:
    python scripts/seed_data.py
    python scripts/seed_data.py --create-tables
"""

import argparse
import asyncio

from sqlalchemy import select

from vehicle_rental.core.security import get_password_hash
from vehicle_rental.database import get_db_context, init_db
from vehicle_rental.domain.enums import (
    FuelType,
    Transmission,
    UserRole,
    UserStatus,
    VehicleCategory,
)
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle

CUSTOMER = {
    "email": "customer@gia-rental.cm",
    "password": "Test@1234",
    "first_name": "Amina",
    "last_name": "Nkongho",
    "phone": "+237650000001",
}

FLEET = [
    {
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2022,
        "category": VehicleCategory.ECONOMY,
        "daily_rate": 25000,
        "seats": 5,
        "transmission": Transmission.AUTOMATIC,
        "fuel_type": FuelType.PETROL,
        "features": ["Air conditioning", "Bluetooth"],
        "license_plate": "LT-1234-A",
        "location": "Douala",
    },
    {
        "brand": "Toyota",
        "model": "Land Cruiser",
        "year": 2021,
        "category": VehicleCategory.SUV,
        "daily_rate": 60000,
        "seats": 7,
        "transmission": Transmission.AUTOMATIC,
        "fuel_type": FuelType.DIESEL,
        "features": ["4x4", "Air conditioning", "GPS"],
        "license_plate": "CE-5678-B",
        "location": "Yaounde",
    },
    {
        "brand": "Hyundai",
        "model": "H1",
        "year": 2020,
        "category": VehicleCategory.VAN,
        "daily_rate": 45000,
        "seats": 12,
        "transmission": Transmission.MANUAL,
        "fuel_type": FuelType.DIESEL,
        "features": ["Air conditioning"],
        "license_plate": "LT-9012-C",
        "location": "Douala",
    },
    {
        "brand": "Mercedes-Benz",
        "model": "E-Class",
        "year": 2023,
        "category": VehicleCategory.LUXURY,
        "daily_rate": 90000,
        "seats": 5,
        "transmission": Transmission.AUTOMATIC,
        "fuel_type": FuelType.HYBRID,
        "features": ["Leather seats", "GPS", "Chauffeur available"],
        "license_plate": "CE-3456-D",
        "location": "Yaounde",
    },
]


async def seed(create_tables: bool = False) -> None:
    if create_tables:
        await init_db()

    async with get_db_context() as session:
        result = await session.execute(select(User).where(User.email == CUSTOMER["email"]))
        if result.scalar_one_or_none() is None:
            session.add(
                User(
                    email=CUSTOMER["email"],
                    password_hash=get_password_hash(CUSTOMER["password"]),
                    first_name=CUSTOMER["first_name"],
                    last_name=CUSTOMER["last_name"],
                    phone=CUSTOMER["phone"],
                    role=UserRole.USER,
                    status=UserStatus.ACTIVE,
                )
            )
            print(f"Created customer: {CUSTOMER['email']} / {CUSTOMER['password']}")

        created = 0
        for data in FLEET:
            result = await session.execute(
                select(Vehicle).where(Vehicle.license_plate == data["license_plate"])
            )
            if result.scalar_one_or_none() is not None:
                continue
            session.add(Vehicle(**data))
            created += 1

        print(f"Added {created} vehicle(s), {len(FLEET) - created} already present")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo data")
    parser.add_argument("--create-tables", action="store_true", help="Create tables first")
    args = parser.parse_args()

    asyncio.run(seed(create_tables=args.create_tables))
