"""Payment database model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_rental.database import Base
from vehicle_rental.domain.enums import PaymentMethod, PaymentStatus
from vehicle_rental.gateways.base import GatewayType
from vehicle_rental.models.user import utcnow

if TYPE_CHECKING:
    from vehicle_rental.models.booking import Booking


class Payment(Base):
    """Card payment for a booking. At most one per booking."""

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("bookings.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        SAEnum(PaymentMethod, native_enum=False, length=20),
        nullable=False,
        default=PaymentMethod.CARD,
    )
    provider: Mapped[GatewayType] = mapped_column(
        SAEnum(GatewayType, native_enum=False, length=20),
        nullable=False,
        default=GatewayType.SIMULATED,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(PaymentStatus, native_enum=False, length=20),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )
    transaction_id: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)

    # Card, masked. The full number and CVV are never stored.
    card_masked: Mapped[str] = mapped_column(String(19), nullable=False)
    card_holder: Mapped[str] = mapped_column(String(255), nullable=False)
    card_expiry: Mapped[str] = mapped_column(String(5), nullable=False)

    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payment")
