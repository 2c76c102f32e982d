"""Vehicle catalog Pydantic schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from vehicle_rental.domain.enums import FuelType, Transmission, VehicleCategory, VehicleStatus


class VehicleBase(BaseModel):
    """Base vehicle schema."""

    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1950, le=2100)
    category: VehicleCategory
    daily_rate: int = Field(..., gt=0)
    seats: int = Field(default=5, ge=1, le=60)
    transmission: Transmission
    fuel_type: FuelType
    image_url: str | None = None
    features: list[str] = Field(default_factory=list)
    description: str | None = Field(None, max_length=5000)
    license_plate: str | None = Field(None, max_length=20)
    mileage: int = Field(default=0, ge=0)
    location: str | None = Field(None, max_length=255)


class VehicleCreate(VehicleBase):
    """Schema for adding a vehicle to the fleet."""

    status: VehicleStatus = VehicleStatus.AVAILABLE


class VehicleUpdate(BaseModel):
    """Partial update; only provided fields change."""

    brand: str | None = Field(None, min_length=1, max_length=100)
    model: str | None = Field(None, min_length=1, max_length=100)
    year: int | None = Field(None, ge=1950, le=2100)
    category: VehicleCategory | None = None
    daily_rate: int | None = Field(None, gt=0)
    seats: int | None = Field(None, ge=1, le=60)
    transmission: Transmission | None = None
    fuel_type: FuelType | None = None
    image_url: str | None = None
    features: list[str] | None = None
    description: str | None = Field(None, max_length=5000)
    license_plate: str | None = Field(None, max_length=20)
    mileage: int | None = Field(None, ge=0)
    location: str | None = Field(None, max_length=255)
    status: VehicleStatus | None = None


class VehicleResponse(VehicleBase):
    """Schema for vehicle response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: VehicleStatus
    label: str
    created_at: datetime


class VehicleListResponse(BaseModel):
    items: list[VehicleResponse]
    total: int
    page: int
    page_size: int


class AvailabilityConflict(BaseModel):
    booking_number: str
    start_date: date
    end_date: date


class AvailabilityResponse(BaseModel):
    vehicle_id: UUID
    start_date: date
    end_date: date
    is_available: bool
    conflicts: list[AvailabilityConflict]
