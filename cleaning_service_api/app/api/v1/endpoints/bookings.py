"""
Booking endpoints for API v1.

All routes require a bearer token and only ever touch bookings owned
by the token holder.  A booking belonging to another user is reported
as 404, the same as a booking that does not exist, so a caller cannot
tell which ids other users' bookings have.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from cleaning_service_api.app.core.db import SQLITE_MAX_INTEGER
from cleaning_service_api.app.core.security import get_current_user
from cleaning_service_api.app.schemas.booking import (
    BookingCreate,
    BookingDeleted,
    BookingRead,
    BookingStatus,
    BookingUpdate,
)
from cleaning_service_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("/bookings", response_model=List[BookingRead])
async def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    limit: Optional[int] = Query(None, ge=1, le=SQLITE_MAX_INTEGER),
    offset: Optional[int] = Query(None, ge=0, le=SQLITE_MAX_INTEGER),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> List[BookingRead]:
    """List the caller's bookings, newest scheduled time first.

    Optional ``status`` narrows the list; ``limit`` and ``offset``
    paginate it.
    """
    return await BookingService.list_bookings(
        current_user["user_id"], status=status_filter, limit=limit, offset=offset
    )


@router.post(
    "/bookings",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    booking: BookingCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> BookingRead:
    """Create a booking owned by the caller.

    ``customer_name``, ``address``, ``date_time`` and ``service_id``
    are all required.  New bookings start as ``pending``.
    """
    try:
        return await BookingService.create_booking(current_user["user_id"], booking)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/bookings/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the booking"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> BookingRead:
    try:
        return await BookingService.get_booking(current_user["user_id"], booking_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/bookings/{booking_id}", response_model=BookingRead)
async def update_booking(
    update: BookingUpdate,
    booking_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the booking"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> BookingRead:
    """Replace the details of one of the caller's bookings.

    The same fields as for creation are required; ``status`` may be
    supplied to move the booking to ``confirmed`` or ``cancelled``.
    """
    try:
        return await BookingService.update_booking(current_user["user_id"], booking_id, update)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/bookings/{booking_id}", response_model=BookingDeleted)
async def delete_booking(
    booking_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the booking"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> BookingDeleted:
    try:
        await BookingService.delete_booking(current_user["user_id"], booking_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BookingDeleted()
