"""Vehicle catalog model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Enum as SAEnum, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_rental.database import Base
from vehicle_rental.domain.enums import FuelType, Transmission, VehicleCategory, VehicleStatus
from vehicle_rental.models.user import utcnow

if TYPE_CHECKING:
    from vehicle_rental.models.booking import Booking


class Vehicle(Base):
    """A rentable vehicle."""

    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    brand: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[VehicleCategory] = mapped_column(
        SAEnum(VehicleCategory, native_enum=False, length=20), nullable=False, index=True
    )
    daily_rate: Mapped[int] = mapped_column(Integer, nullable=False)  # whole currency units
    seats: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    transmission: Mapped[Transmission] = mapped_column(
        SAEnum(Transmission, native_enum=False, length=20), nullable=False
    )
    fuel_type: Mapped[FuelType] = mapped_column(
        SAEnum(FuelType, native_enum=False, length=20), nullable=False
    )
    image_url: Mapped[str | None] = mapped_column(Text)
    features: Mapped[list[str]] = mapped_column(JSON, default=list)
    description: Mapped[str | None] = mapped_column(Text)
    license_plate: Mapped[str | None] = mapped_column(String(20), unique=True)
    mileage: Mapped[int] = mapped_column(Integer, default=0)
    location: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[VehicleStatus] = mapped_column(
        SAEnum(VehicleStatus, native_enum=False, length=20),
        nullable=False,
        default=VehicleStatus.AVAILABLE,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="vehicle", passive_deletes=True
    )

    @property
    def label(self) -> str:
        """Display label, e.g. 'Toyota Corolla 2022'."""
        return f"{self.brand} {self.model} {self.year}"
