"""Password hashing, JWT sessions and password reset tokens.

Tokens only identify the user. Role and account status are read from the
database on every request, so blocking a user or changing their role
takes effect immediately.
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any, Literal
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from vehicle_rental.config import settings
from vehicle_rental.core.exceptions import AuthenticationError

TokenType = Literal["access", "refresh"]

# Password hashing context using Argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _lifetime(token_type: TokenType) -> timedelta:
    if token_type == "refresh":
        return timedelta(days=settings.refresh_token_expire_days)
    return timedelta(minutes=settings.access_token_expire_minutes)


def encode_token(
    claims: dict[str, Any],
    token_type: TokenType,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign ``claims`` as a token of the given type."""
    expire = datetime.now(UTC) + (expires_delta or _lifetime(token_type))
    payload = {**claims, "exp": expire, "type": token_type}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, token_type: TokenType = "access") -> dict[str, Any]:
    """Verify the signature, expiry and type of a token and return its claims."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError(f"Token validation failed: {e}")
    if payload.get("type") != token_type:
        raise AuthenticationError("Invalid token type")
    return payload


def token_subject(token: str, token_type: TokenType = "access") -> UUID:
    """User id carried by a valid token.

    Raises:
        AuthenticationError: bad signature, expired, wrong type, or a
            subject that is not a user id.
    """
    subject = decode_token(token, token_type).get("sub")
    if not subject:
        raise AuthenticationError("Invalid token payload")
    try:
        return UUID(subject)
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")


def create_tokens(user_id: str, email: str, role: str) -> dict[str, str]:
    """Access and refresh tokens for a freshly authenticated user.

    ``role`` is informational for clients; the server never trusts it.
    """
    claims = {"sub": user_id, "email": email, "role": role}
    return {
        "access_token": encode_token(claims, "access"),
        "refresh_token": encode_token(claims, "refresh"),
        "token_type": "bearer",
    }


def generate_reset_token() -> tuple[str, str]:
    """Return a URL-safe password reset token and the SHA-256 digest to store."""
    token = secrets.token_urlsafe(32)
    return token, hash_reset_token(token)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
