"""User endpoints: own profile plus admin user management."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import get_current_active_user, get_current_admin, get_db
from vehicle_rental.core.exceptions import BadRequestError, NotFoundError
from vehicle_rental.domain.enums import UserRole, UserStatus
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.notification import Notification
from vehicle_rental.models.user import User
from vehicle_rental.schemas.user import (
    UserListResponse,
    UserResponse,
    UserRoleUpdate,
    UserStatusUpdate,
    UserUpdate,
)
from vehicle_rental.services.booking_service import purge_bookings

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_other_user(db: AsyncSession, user_id: UUID, admin: User, action: str) -> User:
    if user_id == admin.id:
        raise BadRequestError(f"You cannot {action} your own account")
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError("User", str(user_id))
    return user


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """Get current user's profile."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_my_profile(
    updates: UserUpdate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Update current user's profile."""
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    await db.flush()
    await db.refresh(current_user)
    return current_user


@router.get("", response_model=UserListResponse)
async def list_users(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    role: UserRole | None = None,
    user_status: Annotated[UserStatus | None, Query(alias="status")] = None,
    search: str | None = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
) -> UserListResponse:
    """List users (admin)."""
    query = select(User)
    if role:
        query = query.where(User.role == role)
    if user_status:
        query = query.where(User.status == user_status)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            func.lower(User.email).like(pattern)
            | func.lower(User.first_name).like(pattern)
            | func.lower(User.last_name).like(pattern)
        )

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    query = query.order_by(User.created_at.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(query)

    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in result.scalars().all()],
        total=total or 0,
        page=page,
        page_size=page_size,
    )


@router.patch("/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: UUID,
    update: UserStatusUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Block or unblock a user (admin)."""
    user = await _get_other_user(db, user_id, admin, "change the status of")
    user.status = update.status
    await db.flush()
    await db.refresh(user)

    logger.warning("User %s status set to %s by %s", user.email, update.status.value, admin.email)
    return user


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: UUID,
    update: UserRoleUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Promote or demote a user (admin)."""
    user = await _get_other_user(db, user_id, admin, "change the role of")
    user.role = update.role
    await db.flush()
    await db.refresh(user)

    logger.warning("User %s role set to %s by %s", user.email, update.role.value, admin.email)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Delete a user and everything attached to their bookings (admin)."""
    user = await _get_other_user(db, user_id, admin, "delete")

    result = await db.execute(select(Booking.id).where(Booking.user_id == user.id))
    await purge_bookings(db, list(result.scalars().all()))
    await db.execute(delete(Notification).where(Notification.user_id == user.id))
    await db.delete(user)
    await db.flush()

    logger.warning("User %s deleted by %s", user.email, admin.email)
