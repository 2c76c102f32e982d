"""Payment ticket (receipt) projection.

A ticket is derived entirely from the stored payment, booking, vehicle and
customer rows; it holds no state of its own, so fetching it later yields the
same value the payment call returned.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from vehicle_rental.domain.enums import PAYMENT_METHOD_LABELS, PaymentMethod, PaymentStatus

if TYPE_CHECKING:
    from vehicle_rental.models.booking import Booking
    from vehicle_rental.models.payment import Payment
    from vehicle_rental.models.user import User
    from vehicle_rental.models.vehicle import Vehicle


@dataclass(frozen=True)
class TicketCustomer:
    name: str
    email: str


@dataclass(frozen=True)
class TicketVehicle:
    label: str
    image_url: str | None


@dataclass(frozen=True)
class Ticket:
    transaction_id: str
    payment_id: uuid.UUID
    booking_id: uuid.UUID
    booking_number: str
    processed_at: datetime
    customer: TicketCustomer
    vehicle: TicketVehicle
    start_date: date
    end_date: date
    total_days: int
    amount: int
    currency: str
    payment_method: PaymentMethod
    payment_method_label: str
    card_masked: str
    card_holder: str
    status: PaymentStatus


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def build_ticket(payment: Payment, booking: Booking, vehicle: Vehicle, customer: User) -> Ticket:
    """Combine the rows behind a completed payment into a Ticket."""
    method = PaymentMethod(payment.payment_method)
    return Ticket(
        transaction_id=payment.transaction_id,
        payment_id=payment.id,
        booking_id=booking.id,
        booking_number=booking.booking_number,
        processed_at=_as_utc(payment.processed_at or payment.created_at),
        customer=TicketCustomer(name=customer.full_name, email=customer.email),
        vehicle=TicketVehicle(label=vehicle.label, image_url=vehicle.image_url),
        start_date=booking.start_date,
        end_date=booking.end_date,
        total_days=booking.total_days,
        amount=payment.amount,
        currency=payment.currency,
        payment_method=method,
        payment_method_label=PAYMENT_METHOD_LABELS.get(method, method.value),
        card_masked=payment.card_masked,
        card_holder=payment.card_holder,
        status=PaymentStatus(payment.status),
    )
