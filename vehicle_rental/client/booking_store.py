"""Client-side booking state with optimistic status changes.

A status change is applied in two phases. ``Tentative`` updates the local
copy at once and remembers the previous one; the server's answer then
arrives as ``Confirmed`` (the updated booking) or ``Rejected`` (the booking
as the server currently has it). Either way the server's copy replaces
the tentative one.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from vehicle_rental.client import api
from vehicle_rental.client.session import ApiSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loaded:
    bookings: tuple[dict, ...]


@dataclass(frozen=True)
class Tentative:
    booking_id: str
    status: str


@dataclass(frozen=True)
class Confirmed:
    booking: dict


@dataclass(frozen=True)
class Rejected:
    booking: dict
    reason: str


Action = Loaded | Tentative | Confirmed | Rejected


def _frozen(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class BookingState:
    bookings: Mapping[str, dict] = field(default_factory=lambda: _frozen({}))
    # booking id -> copy from before the tentative change
    pending: Mapping[str, dict] = field(default_factory=lambda: _frozen({}))
    last_error: str | None = None

    def is_pending(self, booking_id: str) -> bool:
        return booking_id in self.pending


def reduce(state: BookingState, action: Action) -> BookingState:
    """Return the state after ``action``; ``state`` is left untouched."""
    bookings = dict(state.bookings)
    pending = dict(state.pending)

    if isinstance(action, Loaded):
        fresh = {b["id"]: b for b in action.bookings}
        # Keep tentative copies until their request settles
        for booking_id in pending:
            if booking_id in bookings:
                fresh[booking_id] = bookings[booking_id]
        return replace(state, bookings=_frozen(fresh))

    if isinstance(action, Tentative):
        current = bookings.get(action.booking_id)
        if current is None:
            return replace(state, last_error=f"Unknown booking {action.booking_id}")
        pending.setdefault(action.booking_id, current)
        bookings[action.booking_id] = {**current, "status": action.status}
        return BookingState(bookings=_frozen(bookings), pending=_frozen(pending), last_error=None)

    if isinstance(action, Confirmed):
        booking_id = action.booking["id"]
        bookings[booking_id] = action.booking
        pending.pop(booking_id, None)
        return BookingState(bookings=_frozen(bookings), pending=_frozen(pending), last_error=None)

    if isinstance(action, Rejected):
        booking_id = action.booking["id"]
        bookings[booking_id] = action.booking
        pending.pop(booking_id, None)
        return BookingState(
            bookings=_frozen(bookings), pending=_frozen(pending), last_error=action.reason
        )

    raise TypeError(f"Unknown action: {action!r}")


class BookingStore:
    """Holds the current ``BookingState`` and applies actions to it."""

    def __init__(self, state: BookingState | None = None) -> None:
        self.state = state or BookingState()

    def apply(self, action: Action) -> BookingState:
        self.state = reduce(self.state, action)
        return self.state

    def get(self, booking_id: str) -> dict | None:
        return self.state.bookings.get(booking_id)

    def load(self, session: ApiSession) -> BookingState:
        return self.apply(Loaded(tuple(api.my_bookings(session))))

    def change_status(self, session: ApiSession, booking_id: str, status: str) -> dict:
        """Optimistically move a booking to ``status`` and reconcile with the server.

        Returns the booking as the server has it after the request. When the
        server refuses, the refused change is rolled back by re-fetching the
        booking and ``state.last_error`` holds the reason.

        Raises:
            ApiError: the server refused and the booking is neither in the
                store nor retrievable.
        """
        if self.get(booking_id) is not None:
            self.apply(Tentative(booking_id, status))
        try:
            updated = api.update_booking_status(session, booking_id, status)
        except api.ApiError as e:
            logger.info("Status change of %s to %s refused: %s", booking_id, status, e.message)
            try:
                authoritative = api.get_booking(session, booking_id)
            except api.ApiError:
                authoritative = self.state.pending.get(booking_id) or self.get(booking_id)
                if authoritative is None:
                    raise e
            self.apply(Rejected(authoritative, e.message))
            return authoritative
        self.apply(Confirmed(updated))
        return updated
