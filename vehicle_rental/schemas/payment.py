"""Payment and ticket Pydantic schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vehicle_rental.domain.enums import PaymentMethod, PaymentStatus
from vehicle_rental.gateways.base import GatewayType
from vehicle_rental.utils.validators import (
    normalize_card_number,
    validate_card_expiry,
    validate_card_number,
    validate_cvv,
)


class PaymentCreate(BaseModel):
    """Card payment for a confirmed booking.

    Only the format of the card fields is validated here; whether the
    charge is accepted is up to the gateway.
    """

    booking_id: UUID
    card_number: str
    card_holder: str = Field(..., max_length=255)
    expiry: str
    cvv: str

    @field_validator("card_number")
    @classmethod
    def validate_card_number(cls, v: str) -> str:
        if not validate_card_number(v):
            raise ValueError("Card number must contain 16 digits")
        return normalize_card_number(v)

    @field_validator("card_holder")
    @classmethod
    def validate_card_holder(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Card holder name is required")
        return v

    @field_validator("expiry")
    @classmethod
    def validate_expiry(cls, v: str) -> str:
        if not validate_card_expiry(v):
            raise ValueError("Expiry must be in MM/YY format")
        return v.strip()

    @field_validator("cvv")
    @classmethod
    def validate_cvv(cls, v: str) -> str:
        if not validate_cvv(v):
            raise ValueError("CVV must be 3 or 4 digits")
        return v.strip()


class PaymentResponse(BaseModel):
    """Schema for payment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    amount: int
    currency: str
    payment_method: PaymentMethod
    provider: GatewayType
    status: PaymentStatus
    transaction_id: str
    card_masked: str
    card_holder: str
    processed_at: datetime | None
    created_at: datetime


class PaymentListResponse(BaseModel):
    items: list[PaymentResponse]
    total: int
    page: int
    page_size: int


class TicketCustomerSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class TicketVehicleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    image_url: str | None


class TicketResponse(BaseModel):
    """Payment receipt shown after a successful payment."""

    model_config = ConfigDict(from_attributes=True)

    transaction_id: str
    payment_id: UUID
    booking_id: UUID
    booking_number: str
    processed_at: datetime
    customer: TicketCustomerSchema
    vehicle: TicketVehicleSchema
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
