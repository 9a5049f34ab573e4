"""
Pydantic models for cleaning bookings.

Request models keep every field optional so that the service layer can
apply the "all fields are required" rule itself (empty strings count
as missing).  Values of the wrong type, such as an unparsable
``date_time`` or an unknown ``status``, are rejected by Pydantic and
reported as a 400 by the application's validation handler.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from cleaning_service_api.app.core.db import SQLITE_MAX_INTEGER


BookingStatus = Literal["pending", "confirmed", "cancelled"]

BOOKING_STATUSES: tuple[str, ...] = ("pending", "confirmed", "cancelled")


class BookingCreate(BaseModel):
    """Schema for creating a booking."""

    customer_name: Optional[str] = Field(None, examples=["Jane Doe"])
    address: Optional[str] = Field(None, examples=["12 High Street"])
    date_time: Optional[datetime] = Field(None, examples=["2030-05-01T10:00:00"])
    # 0 passes the schema so it is reported as a missing field.
    service_id: Optional[int] = Field(None, ge=0, le=SQLITE_MAX_INTEGER, examples=[1])


class BookingUpdate(BookingCreate):
    """Schema for replacing a booking's details.

    The same four fields as ``BookingCreate`` are required.  ``status``
    is optional; when omitted the current status is kept.  The owner of
    a booking can never be changed.
    """

    status: Optional[BookingStatus] = Field(None, examples=["confirmed"])


class BookingRead(BaseModel):
    """A booking joined with the name and price of its service."""

    id: int
    customer_name: str
    address: str
    date_time: datetime
    service_id: int
    user_id: int
    status: BookingStatus
    created_at: datetime
    service_name: str
    service_price: Optional[float] = None

    model_config = {
        "from_attributes": True,
    }


class BookingDeleted(BaseModel):
    message: str = "Booking deleted successfully"
