"""Python client for the rental API."""

from vehicle_rental.client.api import ApiError, PaymentDeclinedError, StateConflictError
from vehicle_rental.client.booking_store import BookingState, BookingStore
from vehicle_rental.client.session import ApiSession

__all__ = [
    "ApiError",
    "ApiSession",
    "BookingState",
    "BookingStore",
    "PaymentDeclinedError",
    "StateConflictError",
]
