#!/usr/bin/env python3
"""
Complete booking and payment flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/flow_book_and_pay.py --vehicle-id <UUID> --start 2026-05-01 --end 2026-05-04

Flow:
    1. Login as customer
    2. Check availability
    3. Create booking
    4. Login as admin and confirm booking
    5. Pay with a card that is declined
    6. Pay with a card that is accepted
    7. Fetch the ticket
"""

import argparse
import json
import sys
from datetime import date

from vehicle_rental.client import ApiError, ApiSession, BookingStore, PaymentDeclinedError
from vehicle_rental.client import api
from vehicle_rental.client.booking_store import Loaded

CUSTOMER_EMAIL = "customer@gia-rental.cm"
CUSTOMER_PASSWORD = "Test@1234"
ADMIN_EMAIL = "admin@gia-rental.cm"
ADMIN_PASSWORD = "Admin@1234"

DECLINED_CARD = "4242424242420002"
ACCEPTED_CARD = "4242424242421111"


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(data: dict, fields: list[str] | None = None):
    """Print a response body, optionally filtering fields."""
    if fields:
        data = {k: data.get(k) for k in fields if k in data}
    print(json.dumps(data, indent=2, default=str))


def fail(step: str, error: ApiError):
    print(f"ERROR during {step} ({error.status_code}): {error.message}")
    sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description="Complete booking and payment flow")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--vehicle-id", required=True, help="Vehicle UUID")
    parser.add_argument("--start", required=True, type=date.fromisoformat, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", required=True, type=date.fromisoformat, help="End date (YYYY-MM-DD)")
    args = parser.parse_args()

    anonymous = ApiSession(base_url=args.base_url)

    # Step 1: Login as customer
    print_step(1, "Login as customer")
    try:
        customer = api.login(anonymous, CUSTOMER_EMAIL, CUSTOMER_PASSWORD)
    except ApiError as e:
        fail("login", e)
    print(f"Logged in as {CUSTOMER_EMAIL}")

    # Step 2: Check availability
    print_step(2, "Check availability")
    availability = api.check_availability(customer, args.vehicle_id, args.start, args.end)
    print_result(availability, ["is_available", "conflicts"])
    if not availability["is_available"]:
        print("ERROR: Vehicle is not available for these dates")
        sys.exit(1)

    # Step 3: Create booking
    print_step(3, "Create booking")
    try:
        booking = api.create_booking(customer, args.vehicle_id, args.start, args.end)
    except ApiError as e:
        fail("booking", e)
    print_result(booking, ["id", "booking_number", "total_days", "total_price", "currency", "status"])
    booking_id = booking["id"]

    # Step 4: Confirm as admin
    print_step(4, "Login as admin and confirm booking")
    try:
        admin = api.login(anonymous, ADMIN_EMAIL, ADMIN_PASSWORD)
    except ApiError as e:
        fail("admin login", e)
    store = BookingStore()
    store.apply(Loaded((booking,)))
    confirmed = store.change_status(admin, booking_id, "CONFIRMED")
    if store.state.last_error:
        print(f"ERROR: Confirmation refused: {store.state.last_error}")
        print_result(confirmed, ["id", "status"])
        sys.exit(1)
    print_result(confirmed, ["id", "booking_number", "status", "confirmed_at"])

    # Step 5: Declined card
    print_step(5, "Pay with a declined card")
    try:
        api.pay_booking(customer, booking_id, DECLINED_CARD, "Test Customer", "12/30", "123")
        print("ERROR: Expected the card to be declined")
        sys.exit(1)
    except PaymentDeclinedError as e:
        print(f"Declined as expected: {e.message}")

    # Step 6: Accepted card
    print_step(6, "Pay with an accepted card")
    try:
        ticket = api.pay_booking(customer, booking_id, ACCEPTED_CARD, "Test Customer", "12/30", "123")
    except ApiError as e:
        fail("payment", e)
    print_result(ticket, ["transaction_id", "amount", "currency", "card_masked", "status"])

    # Step 7: Ticket
    print_step(7, "Fetch ticket")
    try:
        again = api.get_ticket(customer, booking_id)
    except ApiError as e:
        fail("ticket", e)
    print_result(again)

    print("\n" + "="*60)
    print("FULL FLOW COMPLETE")
    print("="*60)
    print(f"Booking:     {booking['booking_number']}")
    print(f"Transaction: {ticket['transaction_id']}")
    print(f"Total Paid:  {ticket['amount']:,} {ticket['currency']}")


if __name__ == "__main__":
    main()
