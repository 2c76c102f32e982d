"""Payment state machine."""

from vehicle_rental.core.exceptions import InvalidBookingStatus
from vehicle_rental.domain.enums import PaymentStatus

PAYMENT_TRANSITIONS: dict[PaymentStatus, set[PaymentStatus]] = {
    PaymentStatus.PENDING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED},
    PaymentStatus.COMPLETED: set(),
    PaymentStatus.FAILED: set(),
    PaymentStatus.REFUNDED: set(),
}


def assert_payment_transition(current: PaymentStatus, target: PaymentStatus) -> None:
    allowed = PAYMENT_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise InvalidBookingStatus(
            f"Invalid payment transition: {current.value} -> {target.value}"
        )
