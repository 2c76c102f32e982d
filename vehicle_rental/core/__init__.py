"""Core utilities and security modules."""

from vehicle_rental.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    DatesNotAvailable,
    InvalidBookingStatus,
    NotFoundError,
    PaymentDeclined,
    PaymentError,
    ValidationError,
    VehicleNotAvailable,
)
from vehicle_rental.core.security import (
    create_tokens,
    decode_token,
    get_password_hash,
    token_subject,
    verify_password,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "BadRequestError",
    "DatesNotAvailable",
    "InvalidBookingStatus",
    "NotFoundError",
    "PaymentDeclined",
    "PaymentError",
    "ValidationError",
    "VehicleNotAvailable",
    "create_tokens",
    "decode_token",
    "get_password_hash",
    "token_subject",
    "verify_password",
]
