"""Pydantic schemas for API validation."""

from vehicle_rental.schemas.booking import (
    AdminBookingCreate,
    BookingCreate,
    BookingDetailResponse,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
    DashboardStats,
)
from vehicle_rental.schemas.notification import NotificationListResponse, NotificationResponse
from vehicle_rental.schemas.payment import (
    PaymentCreate,
    PaymentListResponse,
    PaymentResponse,
    TicketResponse,
)
from vehicle_rental.schemas.review import ReviewCreate, ReviewListResponse, ReviewResponse
from vehicle_rental.schemas.user import (
    AuthResponse,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from vehicle_rental.schemas.vehicle import (
    AvailabilityResponse,
    VehicleCreate,
    VehicleListResponse,
    VehicleResponse,
    VehicleUpdate,
)

__all__ = [
    # User
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "TokenResponse",
    "AuthResponse",
    # Vehicle
    "VehicleCreate",
    "VehicleUpdate",
    "VehicleResponse",
    "VehicleListResponse",
    "AvailabilityResponse",
    # Booking
    "BookingCreate",
    "AdminBookingCreate",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookingDetailResponse",
    "BookingListResponse",
    "DashboardStats",
    # Payment
    "PaymentCreate",
    "PaymentResponse",
    "PaymentListResponse",
    "TicketResponse",
    # Review
    "ReviewCreate",
    "ReviewResponse",
    "ReviewListResponse",
    # Notification
    "NotificationResponse",
    "NotificationListResponse",
]
