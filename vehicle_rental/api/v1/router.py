"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from vehicle_rental.api.v1 import (
    auth,
    bookings,
    notifications,
    payments,
    reviews,
    users,
    vehicles,
)

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Users
api_router.include_router(users.router, prefix="/users", tags=["Users"])

# Vehicles
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["Vehicles"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Payments
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])

# Reviews
api_router.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])

# Notifications
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
