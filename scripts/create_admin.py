#!/usr/bin/env python3
"""Create or reset an admin account with an Argon2 password hash."""

import argparse
import asyncio

from sqlalchemy import select

from vehicle_rental.core.security import get_password_hash
from vehicle_rental.database import AsyncSessionLocal
from vehicle_rental.domain.enums import UserRole, UserStatus
from vehicle_rental.models.user import User


async def create_admin(
    email: str = "admin@gia-rental.cm",
    password: str = "Admin@1234",
    first_name: str = "GIA",
    last_name: str = "Admin",
) -> None:
    """Create an admin user, or promote and reset the existing one."""
    email = email.lower()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        existing = result.scalar_one_or_none()

        if existing:
            existing.password_hash = get_password_hash(password)
            existing.role = UserRole.ADMIN
            existing.status = UserStatus.ACTIVE
            existing.first_name = first_name
            existing.last_name = last_name
            await session.commit()
            print(f"Updated existing admin user: {email}")
        else:
            session.add(
                User(
                    email=email,
                    password_hash=get_password_hash(password),
                    role=UserRole.ADMIN,
                    status=UserStatus.ACTIVE,
                    first_name=first_name,
                    last_name=last_name,
                )
            )
            await session.commit()
            print(f"Created admin user: {email}")

        print(f"Email: {email}")
        print(f"Password: {password}")
        print("Role: ADMIN")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", default="admin@gia-rental.cm", help="Admin email")
    parser.add_argument("--password", default="Admin@1234", help="Admin password")
    parser.add_argument("--first-name", default="GIA", help="First name")
    parser.add_argument("--last-name", default="Admin", help="Last name")
    args = parser.parse_args()

    asyncio.run(
        create_admin(
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    )
