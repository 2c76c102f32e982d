"""HTTP calls against the rental API.

Every function takes the ``ApiSession`` to use; nothing is read from
module state. Errors come back as ``ApiError`` subclasses so callers can
tell a declined card or a refused status change apart from other failures.
"""

import logging
from datetime import date
from typing import Any

import httpx

from vehicle_rental.client.session import ApiSession

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class ApiError(Exception):
    """Request failed; ``status_code`` is None for transport errors."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class PaymentDeclinedError(ApiError):
    """The card was declined; another card may be tried."""


class StateConflictError(ApiError):
    """The server refused the change for the booking's current state."""


def _raise_for_response(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = {}
    detail = body.get("detail") if isinstance(body, dict) else None
    if not isinstance(detail, str):
        detail = response.reason_phrase or "Request failed"
    code = body.get("code") if isinstance(body, dict) else None

    if response.status_code == 402 and code == "payment_declined":
        raise PaymentDeclinedError(detail, response.status_code, code)
    if response.status_code == 409:
        raise StateConflictError(detail, response.status_code, code)
    raise ApiError(detail, response.status_code, code)


def request(
    session: ApiSession,
    method: str,
    endpoint: str,
    json: dict | None = None,
    params: dict | None = None,
) -> Any:
    """Send a request under ``API_PREFIX`` and return the decoded body."""
    url = f"{session.base_url}{API_PREFIX}{endpoint}"
    try:
        response = session.http.request(
            method,
            url,
            json=json,
            params=params,
            headers=session.headers(),
        )
    except httpx.HTTPError as e:
        logger.warning("%s %s failed: %s", method, endpoint, e)
        raise ApiError(f"Could not reach the server: {e}") from e

    _raise_for_response(response)
    if response.status_code == 204 or not response.content:
        return None
    return response.json()


# ---- auth ----


def login(session: ApiSession, email: str, password: str) -> ApiSession:
    data = request(session, "POST", "/auth/login", json={"email": email, "password": password})
    return session.with_tokens(data["access_token"], data["refresh_token"], data.get("user"))


def register(
    session: ApiSession,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: str | None = None,
) -> ApiSession:
    data = request(
        session,
        "POST",
        "/auth/register",
        json={
            "email": email,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "phone": phone,
        },
    )
    return session.with_tokens(data["access_token"], data["refresh_token"], data.get("user"))


def refresh(session: ApiSession) -> ApiSession:
    if not session.refresh_token:
        raise ApiError("Session has no refresh token")
    data = request(session, "POST", "/auth/refresh", json={"refresh_token": session.refresh_token})
    return session.with_tokens(data["access_token"], data["refresh_token"])


# ---- catalog ----


def list_vehicles(session: ApiSession, **filters: Any) -> dict:
    params = {k: v for k, v in filters.items() if v is not None}
    return request(session, "GET", "/vehicles", params=params)


def check_availability(
    session: ApiSession, vehicle_id: str, start_date: date, end_date: date
) -> dict:
    return request(
        session,
        "GET",
        f"/vehicles/{vehicle_id}/availability",
        params={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
    )


# ---- bookings ----


def create_booking(
    session: ApiSession,
    vehicle_id: str,
    start_date: date,
    end_date: date,
    notes: str | None = None,
) -> dict:
    return request(
        session,
        "POST",
        "/bookings",
        json={
            "vehicle_id": str(vehicle_id),
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "notes": notes,
        },
    )


def get_booking(session: ApiSession, booking_id: str) -> dict:
    return request(session, "GET", f"/bookings/{booking_id}")


def my_bookings(session: ApiSession) -> list[dict]:
    return request(session, "GET", "/bookings/my-bookings")


def update_booking_status(session: ApiSession, booking_id: str, status: str) -> dict:
    return request(session, "PATCH", f"/bookings/{booking_id}/status", json={"status": status})


# ---- payments ----


def pay_booking(
    session: ApiSession,
    booking_id: str,
    card_number: str,
    card_holder: str,
    expiry: str,
    cvv: str,
) -> dict:
    """Pay a confirmed booking and return the ticket.

    Raises:
        PaymentDeclinedError: the card was declined.
        StateConflictError: the booking is not confirmed.
    """
    return request(
        session,
        "POST",
        "/payments/process",
        json={
            "booking_id": str(booking_id),
            "card_number": card_number,
            "card_holder": card_holder,
            "expiry": expiry,
            "cvv": cvv,
        },
    )


def get_ticket(session: ApiSession, booking_id: str) -> dict:
    return request(session, "GET", f"/payments/{booking_id}")
