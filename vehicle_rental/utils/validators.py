"""Custom validation utilities."""

import re

CARD_DIGITS = 16
_EXPIRY_RE = re.compile(r"(0[1-9]|1[0-2])/[0-9]{2}")
_CVV_RE = re.compile(r"[0-9]{3,4}")
_CARD_RE = re.compile(r"[0-9]{%d}" % CARD_DIGITS)


def normalize_card_number(number: str) -> str:
    """Strip spaces and dashes from a card number."""
    return re.sub(r"[\s\-]", "", number)


def validate_card_number(number: str) -> bool:
    """Validate card number format.

    Only the shape is checked: exactly 16 digits once spaces and dashes
    are removed. No Luhn checksum.
    """
    cleaned = normalize_card_number(number)
    return bool(_CARD_RE.fullmatch(cleaned))


def validate_card_expiry(expiry: str) -> bool:
    """Validate an ``MM/YY`` expiry. Dates in the past are accepted."""
    return bool(_EXPIRY_RE.fullmatch(expiry.strip()))


def validate_cvv(cvv: str) -> bool:
    return bool(_CVV_RE.fullmatch(cvv.strip()))


def validate_password_strength(password: str) -> str | None:
    """Return an error message if the password is too weak, else None."""
    if len(password) < 8:
        return "Password must be at least 8 characters"
    if not any(c.isupper() for c in password):
        return "Password must contain at least one uppercase letter"
    if not any(c.islower() for c in password):
        return "Password must contain at least one lowercase letter"
    if not any(c.isdigit() for c in password):
        return "Password must contain at least one digit"
    return None


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """Mask sensitive data showing only last few characters.

    Args:
        data: Sensitive data to mask
        visible_chars: Number of characters to show at end

    Returns:
        str: Masked string like '********7890'
    """
    if len(data) <= visible_chars:
        return "*" * len(data)

    masked_length = len(data) - visible_chars
    return "*" * masked_length + data[-visible_chars:]


def mask_card_number(number: str) -> str:
    """Mask a card number in groups of four: ``**** **** **** 1111``."""
    masked = mask_sensitive_data(normalize_card_number(number))
    return " ".join(masked[i : i + 4] for i in range(0, len(masked), 4))
