"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vehicle_rental.domain.enums import BookingStatus, PaymentStatus, VehicleCategory


class BookingBase(BaseModel):
    """Base booking schema."""

    vehicle_id: UUID
    start_date: date
    end_date: date
    pickup_location: str | None = Field(None, max_length=255)
    dropoff_location: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=1000)

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: date, info) -> date:
        start_date = info.data.get("start_date")
        if start_date and v <= start_date:
            raise ValueError("end_date must be after start_date")
        return v


class BookingCreate(BookingBase):
    """Schema for a customer creating a booking."""


class AdminBookingCreate(BookingBase):
    """Schema for an admin booking on behalf of a customer."""

    user_id: UUID


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingVehicleSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    brand: str
    model: str
    year: int
    category: VehicleCategory
    image_url: str | None
    label: str


class BookingCustomerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str
    last_name: str


class BookingResponse(BaseModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_number: str
    user_id: UUID
    vehicle_id: UUID
    start_date: date
    end_date: date
    total_days: int
    daily_rate: int
    total_price: int
    currency: str
    status: BookingStatus
    payment_status: PaymentStatus | None
    pickup_location: str | None
    dropoff_location: str | None
    notes: str | None
    confirmed_at: datetime | None
    cancelled_at: datetime | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class BookingDetailResponse(BookingResponse):
    """Booking with the vehicle and customer it refers to."""

    vehicle: BookingVehicleSummary
    user: BookingCustomerSummary
    allowed_transitions: list[BookingStatus] = Field(default_factory=list)


class BookingListResponse(BaseModel):
    items: list[BookingDetailResponse]
    total: int
    page: int
    page_size: int


class DashboardStats(BaseModel):
    total_vehicles: int
    available_vehicles: int
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    total_revenue: int
    currency: str
    recent_bookings: list[BookingDetailResponse]
