#!/usr/bin/env python3
"""
Login to the rental API and store the access token.

Usage:
    python scripts/auth_login.py
    python scripts/auth_login.py --email admin@gia-rental.cm --password Admin@1234
"""

import argparse
import sys
from pathlib import Path

from vehicle_rental.client import ApiError, ApiSession
from vehicle_rental.client import api

TOKEN_FILE = Path(__file__).parent.parent / ".token"


def main() -> None:
    parser = argparse.ArgumentParser(description="Login to the rental API")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--email", default="customer@gia-rental.cm")
    parser.add_argument("--password", default="Test@1234")
    args = parser.parse_args()

    try:
        session = api.login(ApiSession(base_url=args.base_url), args.email, args.password)
    except ApiError as e:
        print(f"ERROR: Login failed ({e.status_code}): {e.message}")
        sys.exit(1)

    TOKEN_FILE.write_text(session.access_token)
    print(f"Login successful as {session.user['email']} ({session.user['role']})")
    print(f"Token written to {TOKEN_FILE}")


if __name__ == "__main__":
    main()
