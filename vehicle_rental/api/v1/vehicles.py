"""Vehicle catalog endpoints."""

import logging
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_rental.api.deps import get_current_admin, get_db
from vehicle_rental.core.exceptions import BadRequestError, NotFoundError, ValidationError
from vehicle_rental.domain.enums import (
    BookingStatus,
    FuelType,
    Transmission,
    VehicleCategory,
    VehicleStatus,
)
from vehicle_rental.models.booking import Booking
from vehicle_rental.models.user import User
from vehicle_rental.models.vehicle import Vehicle
from vehicle_rental.schemas.vehicle import (
    AvailabilityConflict,
    AvailabilityResponse,
    VehicleCreate,
    VehicleListResponse,
    VehicleResponse,
    VehicleUpdate,
)
from vehicle_rental.services.booking_service import find_conflicts, purge_bookings

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_vehicle(db: AsyncSession, vehicle_id: UUID) -> Vehicle:
    result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
    vehicle = result.scalar_one_or_none()
    if not vehicle:
        raise NotFoundError("Vehicle", str(vehicle_id))
    return vehicle


async def _check_plate_unique(
    db: AsyncSession, plate: str | None, exclude_id: UUID | None = None
) -> None:
    if not plate:
        return
    query = select(Vehicle.id).where(Vehicle.license_plate == plate)
    if exclude_id:
        query = query.where(Vehicle.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none():
        raise ValidationError("License plate already registered")


@router.get("", response_model=VehicleListResponse)
async def list_vehicles(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: VehicleCategory | None = None,
    transmission: Transmission | None = None,
    fuel_type: FuelType | None = None,
    seats: int | None = Query(None, ge=1),
    min_price: int | None = Query(None, ge=0),
    max_price: int | None = Query(None, ge=0),
    available: bool = False,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
) -> VehicleListResponse:
    """Browse the fleet, newest first."""
    query = select(Vehicle)
    if category:
        query = query.where(Vehicle.category == category)
    if transmission:
        query = query.where(Vehicle.transmission == transmission)
    if fuel_type:
        query = query.where(Vehicle.fuel_type == fuel_type)
    if seats:
        query = query.where(Vehicle.seats >= seats)
    if min_price is not None:
        query = query.where(Vehicle.daily_rate >= min_price)
    if max_price is not None:
        query = query.where(Vehicle.daily_rate <= max_price)
    if available:
        query = query.where(Vehicle.status == VehicleStatus.AVAILABLE)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    query = query.order_by(Vehicle.created_at.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(query)

    return VehicleListResponse(
        items=[VehicleResponse.model_validate(v) for v in result.scalars().all()],
        total=total or 0,
        page=page,
        page_size=page_size,
    )


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Vehicle:
    """Get a vehicle by ID."""
    return await _get_vehicle(db, vehicle_id)


@router.get("/{vehicle_id}/availability", response_model=AvailabilityResponse)
async def check_vehicle_availability(
    vehicle_id: UUID,
    start_date: date,
    end_date: date,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AvailabilityResponse:
    """Check whether the vehicle can be booked for the given dates."""
    if end_date <= start_date:
        raise ValidationError("end_date must be after start_date")
    vehicle = await _get_vehicle(db, vehicle_id)
    conflicts = await find_conflicts(db, vehicle.id, start_date, end_date)
    return AvailabilityResponse(
        vehicle_id=vehicle.id,
        start_date=start_date,
        end_date=end_date,
        is_available=vehicle.status == VehicleStatus.AVAILABLE and not conflicts,
        conflicts=[
            AvailabilityConflict(
                booking_number=b.booking_number,
                start_date=b.start_date,
                end_date=b.end_date,
            )
            for b in conflicts
        ],
    )


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Vehicle:
    """Add a vehicle to the fleet (admin)."""
    await _check_plate_unique(db, vehicle_data.license_plate)

    vehicle = Vehicle(**vehicle_data.model_dump())
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)

    logger.info("Vehicle %s (%s) created by %s", vehicle.label, vehicle.id, admin.email)
    return vehicle


@router.patch("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: UUID,
    updates: VehicleUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Vehicle:
    """Update a vehicle (admin). Existing bookings keep their price."""
    vehicle = await _get_vehicle(db, vehicle_id)
    update_data = updates.model_dump(exclude_unset=True)
    if "license_plate" in update_data:
        await _check_plate_unique(db, update_data["license_plate"], vehicle.id)

    for field, value in update_data.items():
        setattr(vehicle, field, value)
    await db.flush()
    await db.refresh(vehicle)

    logger.info("Vehicle %s updated by %s: %s", vehicle.id, admin.email, sorted(update_data))
    return vehicle


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: UUID,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Remove a vehicle (admin). Refused while confirmed bookings reference it."""
    vehicle = await _get_vehicle(db, vehicle_id)

    active = await db.scalar(
        select(func.count(Booking.id)).where(
            Booking.vehicle_id == vehicle.id,
            Booking.status == BookingStatus.CONFIRMED,
        )
    )
    if active:
        raise BadRequestError("Cannot delete a vehicle with active bookings")

    result = await db.execute(select(Booking.id).where(Booking.vehicle_id == vehicle.id))
    await purge_bookings(db, list(result.scalars().all()))
    await db.delete(vehicle)
    await db.flush()

    logger.warning("Vehicle %s (%s) deleted by %s", vehicle.label, vehicle.id, admin.email)
