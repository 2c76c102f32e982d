"""Authentication endpoints."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import get_current_active_user, get_db
from vehicle_rental.core.exceptions import AuthenticationError, ValidationError
from vehicle_rental.core.middleware import (
    login_limiter,
    password_reset_limiter,
    register_limiter,
)
from vehicle_rental.core.security import (
    create_tokens,
    get_password_hash,
    token_subject,
    verify_password,
)
from vehicle_rental.domain.enums import UserRole, UserStatus
from vehicle_rental.models.user import User
from vehicle_rental.schemas.user import (
    AuthResponse,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RefreshTokenRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from vehicle_rental.services.auth_service import issue_password_reset, reset_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    tokens = create_tokens(str(user.id), user.email, user.role.value)
    return AuthResponse(**tokens, user=UserResponse.model_validate(user))


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(register_limiter)],
)
async def register(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Register a new customer account."""
    email = user_data.email.lower()
    result = await db.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none():
        raise ValidationError("Email already registered")

    user = User(
        email=email,
        phone=user_data.phone,
        password_hash=get_password_hash(user_data.password),
        role=UserRole.USER,
        status=UserStatus.ACTIVE,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("User registered: %s", user.email)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(login_limiter)])
async def login(
    credentials: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Login with email and password."""
    result = await db.execute(select(User).where(User.email == credentials.email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning("Failed login attempt for %s", credentials.email)
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        logger.warning("Blocked user %s attempted to log in", user.email)
        raise AuthenticationError("Account is blocked")

    user.last_login_at = datetime.now(UTC)
    await db.flush()

    logger.info("User logged in: %s", user.email)
    return _auth_response(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    request: RefreshTokenRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """Refresh access token using refresh token."""
    user_id = token_subject(request.refresh_token, token_type="refresh")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    tokens = create_tokens(str(user.id), user.email, user.role.value)
    return TokenResponse(**tokens)


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """Get current authenticated user profile."""
    return current_user


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(password_reset_limiter)],
)
async def forgot_password(
    request: PasswordResetRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Request a password reset link."""
    result = await db.execute(select(User).where(User.email == request.email.lower()))
    user = result.scalar_one_or_none()

    # Same answer whether or not the account exists
    if user and user.is_active:
        await issue_password_reset(db, user)

    return MessageResponse(message="If the email exists, a password reset link has been sent")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password_with_token(
    request: PasswordResetConfirm,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Reset password with token."""
    await reset_password(db, request.token, request.new_password)
    return MessageResponse(message="Password has been reset")
