"""Review endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import get_current_active_user, get_db
from vehicle_rental.core.exceptions import AuthorizationError, InvalidBookingStatus, NotFoundError, ValidationError
from vehicle_rental.domain.enums import BookingStatus
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.review import Review
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle
from vehicle_rental.schemas.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    review_data: ReviewCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReviewResponse:
    """Review a completed rental. One review per booking."""
    result = await db.execute(select(Booking).where(Booking.id == review_data.booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise NotFoundError("Booking", str(review_data.booking_id))

    if booking.user_id != current_user.id:
        raise AuthorizationError("You can only review your own bookings")
    if booking.status != BookingStatus.COMPLETED:
        raise InvalidBookingStatus("Can only review completed bookings")

    existing = await db.execute(select(Review.id).where(Review.booking_id == booking.id))
    if existing.scalar_one_or_none():
        raise ValidationError("You have already reviewed this booking")

    review = Review(
        booking_id=booking.id,
        vehicle_id=booking.vehicle_id,
        user_id=current_user.id,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    db.add(review)
    await db.flush()
    await db.refresh(review)

    logger.info("Review %s (%s stars) for booking %s", review.id, review.rating, booking.booking_number)
    response = ReviewResponse.model_validate(review)
    response.reviewer_name = current_user.full_name
    return response


@router.get("/vehicles/{vehicle_id}", response_model=ReviewListResponse)
async def get_vehicle_reviews(
    vehicle_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
) -> ReviewListResponse:
    """Get reviews for a vehicle."""
    vehicle = await db.scalar(select(Vehicle.id).where(Vehicle.id == vehicle_id))
    if not vehicle:
        raise NotFoundError("Vehicle", str(vehicle_id))

    query = select(Review).where(Review.vehicle_id == vehicle_id)

    total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0
    avg_rating = float(
        await db.scalar(select(func.avg(Review.rating)).where(Review.vehicle_id == vehicle_id)) or 0
    )

    # Rating breakdown
    breakdown = {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
    breakdown_result = await db.execute(
        select(Review.rating, func.count())
        .where(Review.vehicle_id == vehicle_id)
        .group_by(Review.rating)
    )
    for rating, count in breakdown_result.all():
        breakdown[rating] = count

    offset = (page - 1) * page_size
    query = query.order_by(Review.created_at.desc()).offset(offset).limit(page_size)
    reviews = list((await db.execute(query)).scalars().all())

    names = {}
    if reviews:
        users = await db.execute(
            select(User).where(User.id.in_({r.user_id for r in reviews}))
        )
        names = {u.id: u.full_name for u in users.scalars()}

    items = []
    for review in reviews:
        item = ReviewResponse.model_validate(review)
        item.reviewer_name = names.get(review.user_id)
        items.append(item)

    return ReviewListResponse(
        reviews=items,
        total=total,
        average_rating=round(avg_rating, 2),
        rating_breakdown=breakdown,
        page=page,
        page_size=page_size,
    )
