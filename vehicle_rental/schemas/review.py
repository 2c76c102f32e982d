"""Review-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """Schema for creating a review."""

    booking_id: UUID
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    """Schema for review response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    vehicle_id: UUID
    user_id: UUID
    rating: int
    comment: str | None
    created_at: datetime

    # Reviewer info (for display)
    reviewer_name: str | None = None


class ReviewListResponse(BaseModel):
    """Schema for paginated review list."""

    reviews: list[ReviewResponse]
    total: int
    average_rating: float
    rating_breakdown: dict[int, int]  # {1: count, 2: count, ...}
    page: int
    page_size: int
