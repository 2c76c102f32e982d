"""Payment endpoints."""

from datetime import date, datetime, time, timedelta
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import get_current_active_user, get_current_admin, get_db
from vehicle_rental.core.middleware import payment_limiter
from vehicle_rental.domain.enums import PaymentMethod, PaymentStatus
from vehicle_rental.gateways.base import CardDetails
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.payment import Payment
from vehicle_rental.models.user import User
from vehicle_rental.schemas.payment import (
    PaymentCreate,
    PaymentListResponse,
    PaymentResponse,
    TicketResponse,
)
from vehicle_rental.services.payment_service import get_ticket, process_payment

router = APIRouter()


@router.post(
    "/process",
    response_model=TicketResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(payment_limiter)],
    responses={
        200: {"model": TicketResponse, "description": "Booking was already paid"},
        402: {"description": "Card declined"},
        409: {"description": "Booking is not confirmed"},
    },
)
async def pay_booking(
    payment_data: PaymentCreate,
    response: Response,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TicketResponse:
    """Pay a confirmed booking by card and receive the ticket.

    Paying an already paid booking returns the original ticket.
    """
    ticket, created = await process_payment(
        db,
        current_user,
        payment_data.booking_id,
        CardDetails(
            number=payment_data.card_number,
            holder=payment_data.card_holder,
            expiry=payment_data.expiry,
            cvv=payment_data.cvv,
        ),
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return TicketResponse.model_validate(ticket)


@router.get("/my", response_model=list[PaymentResponse])
async def get_my_payments(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[Payment]:
    """Payments made by the current user."""
    result = await db.execute(
        select(Payment)
        .join(Booking, Booking.id == Payment.booking_id)
        .where(Booking.user_id == current_user.id)
        .order_by(Payment.created_at.desc())
    )
    return list(result.scalars().all())


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    date_from: date | None = None,
    date_to: date | None = None,
    payment_status: Annotated[PaymentStatus | None, Query(alias="status")] = None,
    payment_method: PaymentMethod | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
) -> PaymentListResponse:
    """List all payments (admin). ``date_to`` is inclusive."""
    query = select(Payment)
    if date_from:
        query = query.where(Payment.created_at >= datetime.combine(date_from, time.min))
    if date_to:
        query = query.where(
            Payment.created_at < datetime.combine(date_to + timedelta(days=1), time.min)
        )
    if payment_status:
        query = query.where(Payment.status == payment_status)
    if payment_method:
        query = query.where(Payment.payment_method == payment_method)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    query = query.order_by(Payment.created_at.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(query)

    return PaymentListResponse(
        items=[PaymentResponse.model_validate(p) for p in result.scalars().all()],
        total=total or 0,
        page=page,
        page_size=page_size,
    )


@router.get("/{booking_id}", response_model=TicketResponse)
async def get_booking_ticket(
    booking_id: UUID,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TicketResponse:
    """Ticket for a paid booking (owner or admin); 404 until it is paid."""
    ticket = await get_ticket(db, current_user, booking_id)
    return TicketResponse.model_validate(ticket)
