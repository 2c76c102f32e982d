"""Booking number and transaction reference generation."""

import random
import secrets
import string
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


async def generate_booking_number(db: AsyncSession) -> str:
    """Generate a unique booking number in format RENT-XXXXXX.

    Args:
        db: Database session for uniqueness check

    Returns:
        str: Unique booking number like 'RENT-A3B7K9'
    """
    from vehicle_rental.models.booking import Booking

    while True:
        chars = string.ascii_uppercase + string.digits
        random_part = "".join(random.choices(chars, k=6))
        booking_number = f"RENT-{random_part}"

        result = await db.execute(
            select(Booking.id).where(Booking.booking_number == booking_number)
        )
        if not result.scalar_one_or_none():
            return booking_number


def generate_transaction_id() -> str:
    """Generate a payment transaction id.

    Returns:
        str: Reference like 'TXN-1717243200000-9F2C41AB'
    """
    epoch_ms = int(time.time() * 1000)
    return f"TXN-{epoch_ms}-{secrets.token_hex(4).upper()}"
