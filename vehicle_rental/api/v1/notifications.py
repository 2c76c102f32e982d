"""In-app notification inbox of the signed-in user."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import get_current_active_user, get_db
from vehicle_rental.core.exceptions import NotFoundError
from vehicle_rental.models.user import User
from vehicle_rental.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
)
from vehicle_rental.services.notification_service import notification_service

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    unread_only: bool = Query(default=False),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> NotificationListResponse:
    notifications, total, unread_count = await notification_service.inbox(
        db, current_user.id, unread_only=unread_only, page=page, page_size=page_size
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        total=total,
        unread_count=unread_count,
        page=page,
        page_size=page_size,
    )


@router.patch("/{notification_id}/read", status_code=204)
async def mark_notification_read(
    notification_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Mark one notification read. Other users' notifications are reported as missing."""
    if await notification_service.mark_read(db, current_user.id, notification_id) is None:
        raise NotFoundError("Notification", str(notification_id))


@router.post("/read-all", status_code=204)
async def mark_all_read(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await notification_service.mark_all_read(db, current_user.id)
