"""Card payment processing and ticket lookup.

Order of checks when paying a booking:

1. the booking exists and belongs to the caller;
2. the booking is CONFIRMED;
3. a completed payment already exists: its ticket is returned unchanged;
4. the gateway accepts the card.

A declined card leaves no trace in the database, so the customer can
simply try again with another card.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.core.exceptions import (
    AuthorizationError,
    InvalidBookingStatus,
    NotFoundError,
    PaymentDeclined,
)
from vehicle_rental.domain.enums import BookingStatus, PaymentMethod, PaymentStatus
from vehicle_rental.domain.payment_state import assert_payment_transition
from vehicle_rental.domain.ticket import Ticket, build_ticket
from vehicle_rental.gateways.base import CardDetails, PaymentGateway
from vehicle_rental.gateways.simulated import get_gateway
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.payment import Payment
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle
from vehicle_rental.services.notification_service import notification_service
from vehicle_rental.utils.validators import mask_card_number

logger = logging.getLogger(__name__)


async def _ticket_for(db: AsyncSession, payment: Payment, booking: Booking) -> Ticket:
    vehicle = (
        await db.execute(select(Vehicle).where(Vehicle.id == booking.vehicle_id))
    ).scalar_one()
    customer = (await db.execute(select(User).where(User.id == booking.user_id))).scalar_one()
    return build_ticket(payment, booking, vehicle, customer)


async def _completed_payment(db: AsyncSession, booking_id: UUID) -> Payment | None:
    result = await db.execute(
        select(Payment).where(
            Payment.booking_id == booking_id,
            Payment.status == PaymentStatus.COMPLETED,
        )
    )
    return result.scalar_one_or_none()


async def process_payment(
    db: AsyncSession,
    user: User,
    booking_id: UUID,
    card: CardDetails,
    gateway: PaymentGateway | None = None,
) -> tuple[Ticket, bool]:
    """Pay a confirmed booking by card.

    Returns:
        The ticket and whether a new payment was created (False when the
        booking had already been paid).

    Raises:
        NotFoundError: unknown booking.
        AuthorizationError: the booking belongs to someone else.
        InvalidBookingStatus: the booking is not CONFIRMED.
        PaymentDeclined: the gateway declined the card.
    """
    gateway = gateway or get_gateway()

    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise NotFoundError("Booking", str(booking_id))
    if booking.user_id != user.id:
        raise AuthorizationError("You can only pay for your own bookings")

    if booking.status != BookingStatus.CONFIRMED:
        raise InvalidBookingStatus(
            f"Only confirmed bookings can be paid (current status: {booking.status.value})"
        )

    existing = await _completed_payment(db, booking.id)
    if existing:
        logger.info(
            "Booking %s already paid (%s), returning existing ticket",
            booking.booking_number,
            existing.transaction_id,
        )
        return await _ticket_for(db, existing, booking), False

    masked = mask_card_number(card.number)
    charge = await gateway.charge_card(
        amount=booking.total_price,
        currency=booking.currency,
        reference_id=booking.booking_number,
        card=card,
    )
    if not charge.success:
        logger.warning(
            "Payment declined for booking %s with card %s: %s",
            booking.booking_number,
            masked,
            charge.error_message,
        )
        raise PaymentDeclined()

    payment = Payment(
        booking_id=booking.id,
        amount=booking.total_price,
        currency=booking.currency,
        payment_method=PaymentMethod.CARD,
        provider=gateway.gateway_type,
        status=PaymentStatus.PENDING,
        transaction_id=charge.transaction_id,
        card_masked=masked,
        card_holder=card.holder,
        card_expiry=card.expiry,
    )
    assert_payment_transition(payment.status, PaymentStatus.COMPLETED)
    payment.status = PaymentStatus.COMPLETED
    payment.processed_at = datetime.now(UTC)

    # One payment row per booking; a concurrent submit loses on the unique key
    try:
        async with db.begin_nested():
            db.add(payment)
            await db.flush()
    except IntegrityError:
        existing = await _completed_payment(db, booking.id)
        if existing is None:
            raise
        logger.info(
            "Booking %s paid by a concurrent request (%s), returning its ticket",
            booking.booking_number,
            existing.transaction_id,
        )
        return await _ticket_for(db, existing, booking), False

    booking.payment_status = PaymentStatus.COMPLETED
    await db.flush()

    await notification_service.notify_payment_received(db, booking, payment)
    logger.info(
        "Payment %s completed for booking %s: %s %s",
        payment.transaction_id,
        booking.booking_number,
        payment.amount,
        payment.currency,
    )
    return await _ticket_for(db, payment, booking), True


async def get_ticket(db: AsyncSession, user: User, booking_id: UUID) -> Ticket:
    """Ticket of a paid booking, for its owner or an admin."""
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise NotFoundError("Booking", str(booking_id))
    if not user.is_admin and booking.user_id != user.id:
        raise AuthorizationError("You don't have permission to access this booking")

    payment = await _completed_payment(db, booking.id)
    if not payment:
        raise NotFoundError("Ticket")
    return await _ticket_for(db, payment, booking)
