"""Password reset token handling."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.config import settings
from vehicle_rental.core.exceptions import ValidationError
from vehicle_rental.core.security import generate_reset_token, get_password_hash, hash_reset_token
from vehicle_rental.models.user import User
from vehicle_rental.services.notification_service import notification_service

logger = logging.getLogger(__name__)


async def issue_password_reset(db: AsyncSession, user: User) -> str:
    """Store a fresh reset token for ``user`` and return the raw token.

    Any previously issued token stops working.
    """
    token, token_hash = generate_reset_token()
    user.reset_token_hash = token_hash
    user.reset_token_expires_at = datetime.now(UTC) + timedelta(
        minutes=settings.password_reset_expire_minutes
    )
    await db.flush()
    await notification_service.notify_password_reset(db, user.id)
    return token


async def reset_password(db: AsyncSession, token: str, new_password: str) -> User:
    """Set a new password using a reset token. The token is single use."""
    result = await db.execute(
        select(User).where(User.reset_token_hash == hash_reset_token(token))
    )
    user = result.scalar_one_or_none()
    if not user or not user.reset_token_expires_at:
        raise ValidationError("Invalid or expired reset token")

    expires_at = user.reset_token_expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    if expires_at < datetime.now(UTC):
        raise ValidationError("Invalid or expired reset token")

    user.password_hash = get_password_hash(new_password)
    user.reset_token_hash = None
    user.reset_token_expires_at = None
    await db.flush()
    logger.info("Password reset completed for %s", user.email)
    return user
