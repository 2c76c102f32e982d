"""In-app notification service.

Notifications are written in the caller's session, so they commit or roll
back together with the change that triggered them. Nothing is delivered
outside the application; e-mail style events are only logged.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.domain.enums import BookingStatus, NotificationType
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.notification import Notification
from vehicle_rental.models.payment import Payment

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    BookingStatus.PENDING: ("Booking reopened", "Booking #{number} is pending again."),
    BookingStatus.CONFIRMED: (
        "Booking confirmed!",
        "Booking #{number} from {start} to {end} has been confirmed. You can now pay online.",
    ),
    BookingStatus.CANCELLED: ("Booking cancelled", "Booking #{number} has been cancelled."),
    BookingStatus.COMPLETED: (
        "Rental completed",
        "Booking #{number} is complete. Thank you for renting with us!",
    ),
}


class NotificationService:
    """Service for creating in-app notifications."""

    async def create_notification(
        self,
        db: AsyncSession,
        user_id: UUID,
        title: str,
        body: str,
        notification_type: NotificationType,
        booking_id: UUID | None = None,
    ) -> Notification:
        """Create an in-app notification.

        Args:
            db: Database session
            user_id: User to notify
            title: Notification title
            body: Notification body text
            notification_type: Type of notification
            booking_id: Related booking ID

        Returns:
            Notification: Created notification
        """
        notification = Notification(
            user_id=user_id,
            title=title,
            body=body,
            notification_type=notification_type,
            booking_id=booking_id,
        )
        db.add(notification)
        await db.flush()
        return notification

    async def notify_booking_created(
        self, db: AsyncSession, booking: Booking, vehicle_label: str
    ) -> Notification:
        return await self.create_notification(
            db=db,
            user_id=booking.user_id,
            title="Booking received",
            body=(
                f"Your booking #{booking.booking_number} for {vehicle_label} from "
                f"{booking.start_date} to {booking.end_date} is awaiting confirmation."
            ),
            notification_type=NotificationType.BOOKING_CREATED,
            booking_id=booking.id,
        )

    async def notify_booking_status(self, db: AsyncSession, booking: Booking) -> Notification:
        title, template = _STATUS_MESSAGES[booking.status]
        return await self.create_notification(
            db=db,
            user_id=booking.user_id,
            title=title,
            body=template.format(
                number=booking.booking_number,
                start=booking.start_date,
                end=booking.end_date,
            ),
            notification_type=NotificationType.BOOKING_STATUS,
            booking_id=booking.id,
        )

    async def notify_payment_received(
        self, db: AsyncSession, booking: Booking, payment: Payment
    ) -> Notification:
        return await self.create_notification(
            db=db,
            user_id=booking.user_id,
            title="Payment received",
            body=(
                f"We received {payment.amount} {payment.currency} for booking "
                f"#{booking.booking_number}. Transaction {payment.transaction_id}."
            ),
            notification_type=NotificationType.PAYMENT_RECEIVED,
            booking_id=booking.id,
        )

    async def notify_password_reset(self, db: AsyncSession, user_id: UUID) -> Notification:
        logger.info("Password reset requested for user %s", user_id)
        return await self.create_notification(
            db=db,
            user_id=user_id,
            title="Password reset requested",
            body="A password reset was requested for your account. The link expires in one hour.",
            notification_type=NotificationType.ACCOUNT,
        )

    async def inbox(
        self,
        db: AsyncSession,
        user_id: UUID,
        unread_only: bool = False,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Notification], int, int]:
        """One page of a user's notifications, newest first.

        Returns:
            The page, the number of notifications matching the filter, and
            the user's unread count regardless of the filter.
        """
        mine = Notification.user_id == user_id
        unread = Notification.is_read.is_(False)
        filters = [mine, unread] if unread_only else [mine]

        total = await db.scalar(select(func.count(Notification.id)).where(*filters)) or 0
        unread_count = await db.scalar(select(func.count(Notification.id)).where(mine, unread)) or 0
        result = await db.execute(
            select(Notification)
            .where(*filters)
            .order_by(Notification.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(result.scalars().all()), total, unread_count

    async def mark_read(self, db: AsyncSession, user_id: UUID, notification_id: UUID) -> Notification | None:
        """Mark one of the user's notifications read; None if it is not theirs."""
        notification = await db.scalar(
            select(Notification).where(Notification.id == notification_id, Notification.user_id == user_id)
        )
        if notification is not None and not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(UTC)
            await db.flush()
        return notification

    async def mark_all_read(self, db: AsyncSession, user_id: UUID) -> int:
        result = await db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True, read_at=datetime.now(UTC))
        )
        return result.rowcount


# Singleton instance
notification_service = NotificationService()
