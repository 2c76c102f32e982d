"""Booking state machine.

Transitions are checked against both the edge table and the actor: admins
may take any listed edge, a customer may only cancel a booking they own
while it is still PENDING or CONFIRMED.
"""

from vehicle_rental.core.exceptions import AuthorizationError, InvalidBookingStatus
from vehicle_rental.domain.enums import BookingStatus, UserRole

BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    # Admin reset of a cancelled booking
    BookingStatus.CANCELLED: {BookingStatus.PENDING},
    BookingStatus.COMPLETED: set(),
}

CUSTOMER_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
}


def allowed_transitions(
    current: BookingStatus, actor_role: UserRole, is_owner: bool
) -> set[BookingStatus]:
    """Statuses the actor may move a booking to from ``current``."""
    if actor_role == UserRole.ADMIN:
        return set(BOOKING_TRANSITIONS.get(current, set()))
    if not is_owner:
        return set()
    return set(CUSTOMER_TRANSITIONS.get(current, set()))


def assert_booking_transition(
    current: BookingStatus,
    target: BookingStatus,
    actor_role: UserRole,
    is_owner: bool,
) -> BookingStatus:
    """Return ``target`` if the actor may move the booking there.

    Raises:
        InvalidBookingStatus: the edge does not exist.
        AuthorizationError: the edge exists but the actor may not take it.
    """
    if target not in BOOKING_TRANSITIONS.get(current, set()):
        raise InvalidBookingStatus(
            f"Invalid booking transition: {current.value} -> {target.value}"
        )
    if target not in allowed_transitions(current, actor_role, is_owner):
        if actor_role != UserRole.ADMIN and not is_owner:
            raise AuthorizationError("You can only manage your own bookings")
        raise AuthorizationError(
            f"Only an administrator can move a booking to {target.value}"
        )
    return target
