"""Database models."""

from vehicle_rental.models.booking import Booking
from vehicle_rental.models.notification import Notification
from vehicle_rental.models.payment import Payment
from vehicle_rental.models.review import Review
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle

__all__ = [
    "User",
    "Vehicle",
    "Booking",
    "Payment",
    "Review",
    "Notification",
]
