"""Booking endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import (
    get_booking_for_user,
    get_current_active_user,
    get_current_admin,
    get_db,
)
from vehicle_rental.config import settings
from vehicle_rental.core.exceptions import NotFoundError
from vehicle_rental.domain.booking_state import allowed_transitions
from vehicle_rental.domain.enums import BookingStatus, VehicleStatus
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle
from vehicle_rental.schemas.booking import (
    AdminBookingCreate,
    BookingCreate,
    BookingCustomerSummary,
    BookingDetailResponse,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
    BookingVehicleSummary,
    DashboardStats,
)
from vehicle_rental.services.booking_service import (
    change_booking_status,
    create_booking,
    purge_bookings,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _with_details(
    db: AsyncSession, bookings: list[Booking], viewer: User
) -> list[BookingDetailResponse]:
    """Attach vehicle, customer and the viewer's allowed transitions."""
    if not bookings:
        return []
    vehicle_ids = {b.vehicle_id for b in bookings}
    user_ids = {b.user_id for b in bookings}
    vehicles = {
        v.id: v
        for v in (await db.execute(select(Vehicle).where(Vehicle.id.in_(vehicle_ids)))).scalars()
    }
    users = {
        u.id: u for u in (await db.execute(select(User).where(User.id.in_(user_ids)))).scalars()
    }

    details = []
    for booking in bookings:
        allowed = allowed_transitions(
            booking.status, viewer.role, is_owner=booking.user_id == viewer.id
        )
        details.append(
            BookingDetailResponse(
                **BookingResponse.model_validate(booking).model_dump(),
                vehicle=BookingVehicleSummary.model_validate(vehicles[booking.vehicle_id]),
                user=BookingCustomerSummary.model_validate(users[booking.user_id]),
                allowed_transitions=sorted(allowed),
            )
        )
    return details


@router.post("", response_model=BookingDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_my_booking(
    booking_data: BookingCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingDetailResponse:
    """Book a vehicle. The booking starts PENDING until an admin confirms it."""
    booking = await create_booking(
        db,
        customer=current_user,
        **booking_data.model_dump(),
    )
    await db.refresh(booking)
    return (await _with_details(db, [booking], current_user))[0]


@router.post(
    "/admin-create",
    response_model=BookingDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def admin_create_booking(
    booking_data: AdminBookingCreate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingDetailResponse:
    """Create a booking on behalf of a customer (admin)."""
    result = await db.execute(select(User).where(User.id == booking_data.user_id))
    customer = result.scalar_one_or_none()
    if not customer:
        raise NotFoundError("User", str(booking_data.user_id))

    booking = await create_booking(
        db,
        customer=customer,
        **booking_data.model_dump(exclude={"user_id"}),
    )
    await db.refresh(booking)
    logger.info("Booking %s created by admin %s", booking.booking_number, admin.email)
    return (await _with_details(db, [booking], admin))[0]


@router.get("/my-bookings", response_model=list[BookingDetailResponse])
async def get_my_bookings(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    booking_status: Annotated[BookingStatus | None, Query(alias="status")] = None,
) -> list[BookingDetailResponse]:
    """Get the current user's bookings, newest first."""
    query = select(Booking).where(Booking.user_id == current_user.id)
    if booking_status:
        query = query.where(Booking.status == booking_status)
    result = await db.execute(query.order_by(Booking.created_at.desc()))
    return await _with_details(db, list(result.scalars().all()), current_user)


@router.get("/stats/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DashboardStats:
    """Fleet and booking figures for the admin dashboard."""
    total_vehicles = await db.scalar(select(func.count(Vehicle.id)))
    available_vehicles = await db.scalar(
        select(func.count(Vehicle.id)).where(Vehicle.status == VehicleStatus.AVAILABLE)
    )

    counts = dict(
        (await db.execute(select(Booking.status, func.count(Booking.id)).group_by(Booking.status))).all()
    )
    revenue = await db.scalar(
        select(func.coalesce(func.sum(Booking.total_price), 0)).where(
            Booking.status.in_([BookingStatus.CONFIRMED, BookingStatus.COMPLETED])
        )
    )

    result = await db.execute(select(Booking).order_by(Booking.created_at.desc()).limit(10))
    recent = await _with_details(db, list(result.scalars().all()), admin)

    return DashboardStats(
        total_vehicles=total_vehicles or 0,
        available_vehicles=available_vehicles or 0,
        total_bookings=sum(counts.values()),
        pending_bookings=counts.get(BookingStatus.PENDING, 0),
        confirmed_bookings=counts.get(BookingStatus.CONFIRMED, 0),
        total_revenue=revenue or 0,
        currency=settings.currency,
        recent_bookings=recent,
    )


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    booking_status: Annotated[BookingStatus | None, Query(alias="status")] = None,
    vehicle_id: UUID | None = None,
    user_id: UUID | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
) -> BookingListResponse:
    """List all bookings (admin)."""
    query = select(Booking)
    if booking_status:
        query = query.where(Booking.status == booking_status)
    if vehicle_id:
        query = query.where(Booking.vehicle_id == vehicle_id)
    if user_id:
        query = query.where(Booking.user_id == user_id)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    query = query.order_by(Booking.created_at.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(query)

    return BookingListResponse(
        items=await _with_details(db, list(result.scalars().all()), admin),
        total=total or 0,
        page=page,
        page_size=page_size,
    )


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingDetailResponse:
    """Get booking details (owner or admin)."""
    booking = await get_booking_for_user(db, booking_id, current_user)
    return (await _with_details(db, [booking], current_user))[0]


@router.patch("/{booking_id}/status", response_model=BookingDetailResponse)
async def update_booking_status(
    booking_id: UUID,
    update: BookingStatusUpdate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingDetailResponse:
    """Move a booking through its lifecycle.

    Admins may confirm, complete, cancel or reopen a booking; customers may
    only cancel their own pending or confirmed bookings.
    """
    booking = await get_booking_for_user(db, booking_id, current_user)
    booking = await change_booking_status(db, booking, update.status, current_user)
    await db.refresh(booking)
    return (await _with_details(db, [booking], current_user))[0]


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: UUID,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Delete a booking and its payment (admin)."""
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise NotFoundError("Booking", str(booking_id))

    await purge_bookings(db, [booking.id])
    logger.warning("Booking %s deleted by %s", booking.booking_number, admin.email)
