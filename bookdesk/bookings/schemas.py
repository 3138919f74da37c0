"""
Booking schemas — booking records and status change results.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional


class BookingRecord(BaseModel):
    """The booking fields the lifecycle and revenue rules read."""

    id: Optional[str] = None
    status: Optional[str] = None
    staff_id: Optional[str] = None
    team_id: Optional[str] = None
    team_member_count: Optional[int] = Field(
        None, description="Team size captured when the booking was created"
    )
    total_price: float = 0.0
    payment_status: Optional[str] = None
    customer_id: Optional[str] = None
    is_deleted: bool = False

    @field_validator("total_price", mode="before")
    @classmethod
    def default_price(cls, v):
        return v or 0.0


class StatusChangeResult(BaseModel):
    booking_id: str
    previous_status: Optional[str] = None
    new_status: str
    changed: bool = Field(..., description="False when the status was already set")
    message: Optional[str] = None
