"""
Business logic for cleaning bookings.

Every operation takes the id of the authenticated user and includes it
in the SQL ``WHERE`` clause, so a booking that belongs to someone else
behaves exactly like one that does not exist.  The owner column is
written once on insert and never appears in an ``UPDATE``.

Bookings are returned joined with the name and price of the booked
service.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from cleaning_service_api.app.core.db import get_connection
from cleaning_service_api.app.schemas.booking import (
    BOOKING_STATUSES,
    BookingCreate,
    BookingRead,
    BookingUpdate,
)


logger = logging.getLogger(__name__)

_SELECT_JOINED = """
    SELECT b.id, b.customer_name, b.address, b.date_time, b.service_id,
           b.user_id, b.status, b.created_at,
           s.name AS service_name, s.price AS service_price
    FROM bookings b
    JOIN services s ON b.service_id = s.id
"""

NOT_FOUND_MESSAGE = "Booking not found or not authorized"


def _validate_fields(data: BookingCreate) -> tuple[str, str, str, int]:
    """Return the booking fields ready for SQL or raise ``ValueError``.

    Blank strings and a zero service id count as missing.  Text is
    stored as given; aware datetimes are converted to UTC.
    """
    missing = [
        name
        for name, value in (("customer_name", data.customer_name), ("address", data.address))
        if not (value or "").strip()
    ]
    if data.date_time is None:
        missing.append("date_time")
    if not data.service_id:
        missing.append("service_id")
    if missing:
        logger.debug("Rejected booking with missing fields: %s", ", ".join(missing))
        raise ValueError("All fields are required")
    return data.customer_name, data.address, _format_datetime(data.date_time), data.service_id


def _format_datetime(value: datetime) -> str:
    # Aware values are stored in UTC so that ORDER BY on the text sorts by
    # instant.  Naive values are kept as sent.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


def _ensure_service_exists(cursor, service_id: int) -> None:
    row = cursor.execute("SELECT id FROM services WHERE id = ?", (service_id,)).fetchone()
    if not row:
        raise ValueError(f"Service {service_id} does not exist")


def _row_to_booking(row) -> BookingRead:
    return BookingRead(**dict(row))


class BookingService:
    """Owner‑scoped CRUD over the ``bookings`` table."""

    @classmethod
    async def list_bookings(
        cls,
        user_id: int,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[BookingRead]:
        """List a user's bookings, newest scheduled time first.

        ``status`` restricts the result to one of ``pending``,
        ``confirmed`` or ``cancelled``.  ``limit`` and ``offset``
        paginate; ``offset`` is ignored without ``limit``.
        """
        query = _SELECT_JOINED + " WHERE b.user_id = ?"
        params: list = [user_id]
        if status is not None:
            if status not in BOOKING_STATUSES:
                raise ValueError(f"Unknown booking status '{status}'")
            query += " AND b.status = ?"
            params.append(status)
        query += " ORDER BY b.date_time DESC, b.id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
            if offset is not None:
                query += " OFFSET ?"
                params.append(offset)
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [_row_to_booking(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_booking(cls, user_id: int, booking_id: int) -> BookingRead:
        """Return one of the user's bookings.

        Raises ``LookupError`` if the booking does not exist or belongs
        to another user.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                _SELECT_JOINED + " WHERE b.id = ? AND b.user_id = ?",
                (booking_id, user_id),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            raise LookupError(NOT_FOUND_MESSAGE)
        return _row_to_booking(row)

    @classmethod
    async def create_booking(cls, user_id: int, data: BookingCreate) -> BookingRead:
        """Create a ``pending`` booking owned by ``user_id``.

        Raises ``ValueError`` if a field is missing or the service does
        not exist.
        """
        customer_name, address, date_time, service_id = _validate_fields(data)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _ensure_service_exists(cursor, service_id)
            cursor.execute(
                """
                INSERT INTO bookings (customer_name, address, date_time, service_id, user_id, status)
                VALUES (?, ?, ?, ?, ?, 'pending')
                """,
                (customer_name, address, date_time, service_id, user_id),
            )
            booking_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(_SELECT_JOINED + " WHERE b.id = ?", (booking_id,)).fetchone()
        finally:
            conn.close()
        logger.info("User %s created booking %s", user_id, booking_id)
        return _row_to_booking(row)

    @classmethod
    async def update_booking(cls, user_id: int, booking_id: int, data: BookingUpdate) -> BookingRead:
        """Replace the details of one of the user's bookings.

        Raises ``ValueError`` for missing fields or an unknown service
        and ``LookupError`` if the booking does not exist or belongs to
        another user.
        """
        customer_name, address, date_time, service_id = _validate_fields(data)
        assignments = "customer_name = ?, address = ?, date_time = ?, service_id = ?"
        values: list = [customer_name, address, date_time, service_id]
        if data.status is not None:
            assignments += ", status = ?"
            values.append(data.status)
        values.extend([booking_id, user_id])
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _ensure_service_exists(cursor, service_id)
            cursor.execute(
                f"UPDATE bookings SET {assignments} WHERE id = ? AND user_id = ?",
                tuple(values),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                raise LookupError(NOT_FOUND_MESSAGE)
            conn.commit()
            row = cursor.execute(_SELECT_JOINED + " WHERE b.id = ?", (booking_id,)).fetchone()
        finally:
            conn.close()
        logger.info("User %s updated booking %s", user_id, booking_id)
        return _row_to_booking(row)

    @classmethod
    async def delete_booking(cls, user_id: int, booking_id: int) -> None:
        """Delete one of the user's bookings.

        Raises ``LookupError`` if the booking does not exist or belongs
        to another user.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM bookings WHERE id = ? AND user_id = ?",
                (booking_id, user_id),
            )
            if cursor.rowcount == 0:
                raise LookupError(NOT_FOUND_MESSAGE)
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s deleted booking %s", user_id, booking_id)
