"""Booking creation, status changes and availability checks."""

import logging
from datetime import UTC, date, datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.config import settings
from vehicle_rental.core.exceptions import DatesNotAvailable, NotFoundError, VehicleNotAvailable
from vehicle_rental.domain.booking_state import assert_booking_transition
from vehicle_rental.domain.enums import BookingStatus, VehicleStatus
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.notification import Notification
from vehicle_rental.models.payment import Payment
from vehicle_rental.models.review import Review
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle
from vehicle_rental.services.notification_service import notification_service
from vehicle_rental.utils.booking_number import generate_booking_number

logger = logging.getLogger(__name__)


async def find_conflicts(
    db: AsyncSession,
    vehicle_id: UUID,
    start_date: date,
    end_date: date,
    exclude_booking_id: UUID | None = None,
) -> list[Booking]:
    """Confirmed bookings of the vehicle overlapping ``[start_date, end_date)``.

    Ranges are half-open, so a rental may start on the day another ends.
    """
    query = select(Booking).where(
        Booking.vehicle_id == vehicle_id,
        Booking.status == BookingStatus.CONFIRMED,
        Booking.start_date < end_date,
        Booking.end_date > start_date,
    )
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)
    result = await db.execute(query.order_by(Booking.start_date))
    return list(result.scalars().all())


async def create_booking(
    db: AsyncSession,
    customer: User,
    vehicle_id: UUID,
    start_date: date,
    end_date: date,
    pickup_location: str | None = None,
    dropoff_location: str | None = None,
    notes: str | None = None,
) -> Booking:
    """Create a PENDING booking with its price fixed from the current daily rate.

    Raises:
        NotFoundError: the vehicle does not exist.
        VehicleNotAvailable: the vehicle is not AVAILABLE.
        DatesNotAvailable: a confirmed booking overlaps the dates.
    """
    result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
    vehicle = result.scalar_one_or_none()
    if not vehicle:
        raise NotFoundError("Vehicle", str(vehicle_id))
    if vehicle.status != VehicleStatus.AVAILABLE:
        raise VehicleNotAvailable()

    if await find_conflicts(db, vehicle.id, start_date, end_date):
        raise DatesNotAvailable()

    total_days = (end_date - start_date).days
    booking = Booking(
        booking_number=await generate_booking_number(db),
        user_id=customer.id,
        vehicle_id=vehicle.id,
        start_date=start_date,
        end_date=end_date,
        total_days=total_days,
        daily_rate=vehicle.daily_rate,
        total_price=total_days * vehicle.daily_rate,
        currency=settings.currency,
        status=BookingStatus.PENDING,
        pickup_location=pickup_location,
        dropoff_location=dropoff_location,
        notes=notes,
    )
    db.add(booking)
    await db.flush()

    await notification_service.notify_booking_created(db, booking, vehicle.label)
    logger.info(
        "Booking %s created by %s for vehicle %s (%s days, %s %s)",
        booking.booking_number,
        customer.email,
        vehicle.id,
        total_days,
        booking.total_price,
        booking.currency,
    )
    return booking


async def change_booking_status(
    db: AsyncSession,
    booking: Booking,
    target: BookingStatus,
    actor: User,
) -> Booking:
    """Move a booking to ``target`` on behalf of ``actor``.

    The booking is left untouched when the transition is rejected.
    """
    current = booking.status
    assert_booking_transition(
        current, target, actor.role, is_owner=booking.user_id == actor.id
    )

    if target == BookingStatus.CONFIRMED:
        conflicts = await find_conflicts(
            db, booking.vehicle_id, booking.start_date, booking.end_date, booking.id
        )
        if conflicts:
            raise DatesNotAvailable(
                f"Vehicle is already booked by {conflicts[0].booking_number} for these dates"
            )

    now = datetime.now(UTC)
    booking.status = target
    if target == BookingStatus.CONFIRMED:
        booking.confirmed_at = now
    elif target == BookingStatus.CANCELLED:
        booking.cancelled_at = now
    elif target == BookingStatus.COMPLETED:
        booking.completed_at = now
    elif target == BookingStatus.PENDING:
        booking.confirmed_at = None
        booking.cancelled_at = None
    await db.flush()

    await notification_service.notify_booking_status(db, booking)
    logger.info(
        "Booking %s %s -> %s by %s",
        booking.booking_number,
        current.value,
        target.value,
        actor.email,
    )
    return booking


async def purge_bookings(db: AsyncSession, booking_ids: list[UUID]) -> None:
    """Delete bookings together with their payment, review and notifications."""
    if not booking_ids:
        return
    await db.execute(delete(Notification).where(Notification.booking_id.in_(booking_ids)))
    await db.execute(delete(Review).where(Review.booking_id.in_(booking_ids)))
    await db.execute(delete(Payment).where(Payment.booking_id.in_(booking_ids)))
    await db.execute(delete(Booking).where(Booking.id.in_(booking_ids)))
