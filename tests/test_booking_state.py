"""Tests for the booking and payment state machines."""

import pytest

from vehicle_rental.core.exceptions import AuthorizationError, InvalidBookingStatus
from vehicle_rental.domain.booking_state import (
    BOOKING_TRANSITIONS,
    allowed_transitions,
    assert_booking_transition,
)
from vehicle_rental.domain.enums import BookingStatus, PaymentStatus, UserRole
from vehicle_rental.domain.payment_state import assert_payment_transition

PENDING = BookingStatus.PENDING
CONFIRMED = BookingStatus.CONFIRMED
CANCELLED = BookingStatus.CANCELLED
COMPLETED = BookingStatus.COMPLETED


@pytest.mark.parametrize(
    "current,target",
    [
        (PENDING, CONFIRMED),
        (PENDING, CANCELLED),
        (CONFIRMED, COMPLETED),
        (CONFIRMED, CANCELLED),
        (CANCELLED, PENDING),
    ],
)
def test_admin_may_take_every_listed_edge(current, target):
    assert assert_booking_transition(current, target, UserRole.ADMIN, is_owner=False) == target


@pytest.mark.parametrize(
    "current,target",
    [
        (CANCELLED, COMPLETED),
        (CANCELLED, CONFIRMED),
        (COMPLETED, PENDING),
        (COMPLETED, CANCELLED),
        (PENDING, COMPLETED),
        (PENDING, PENDING),
    ],
)
def test_unlisted_edges_are_invalid_even_for_admin(current, target):
    with pytest.raises(InvalidBookingStatus) as exc:
        assert_booking_transition(current, target, UserRole.ADMIN, is_owner=False)
    assert exc.value.status_code == 409
    assert exc.value.code == "invalid_status"


def test_completed_is_terminal():
    assert BOOKING_TRANSITIONS[COMPLETED] == set()
    assert allowed_transitions(COMPLETED, UserRole.ADMIN, is_owner=True) == set()


@pytest.mark.parametrize("current", [PENDING, CONFIRMED])
def test_owner_may_cancel(current):
    assert assert_booking_transition(current, CANCELLED, UserRole.USER, is_owner=True) == CANCELLED


def test_owner_cannot_confirm():
    with pytest.raises(AuthorizationError):
        assert_booking_transition(PENDING, CONFIRMED, UserRole.USER, is_owner=True)


def test_owner_cannot_reopen_cancelled_booking():
    with pytest.raises(AuthorizationError):
        assert_booking_transition(CANCELLED, PENDING, UserRole.USER, is_owner=True)


def test_stranger_cannot_cancel():
    with pytest.raises(AuthorizationError):
        assert_booking_transition(PENDING, CANCELLED, UserRole.USER, is_owner=False)


def test_allowed_transitions_for_owner():
    assert allowed_transitions(PENDING, UserRole.USER, is_owner=True) == {CANCELLED}
    assert allowed_transitions(CANCELLED, UserRole.USER, is_owner=True) == set()
    assert allowed_transitions(PENDING, UserRole.USER, is_owner=False) == set()


def test_payment_pending_can_complete_or_fail():
    assert_payment_transition(PaymentStatus.PENDING, PaymentStatus.COMPLETED)
    assert_payment_transition(PaymentStatus.PENDING, PaymentStatus.FAILED)


@pytest.mark.parametrize("current", [PaymentStatus.COMPLETED, PaymentStatus.FAILED])
def test_settled_payments_do_not_move(current):
    with pytest.raises(InvalidBookingStatus):
        assert_payment_transition(current, PaymentStatus.PENDING)
