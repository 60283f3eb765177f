# roombook/core/conflicts.py

import datetime as dt
from typing import Optional

from sqlalchemy.orm import Session

from roombook.core.validation import ClockTime
from roombook.models import Booking


def hours_overlap(existing_start: int, existing_end: int, start: int, end: int) -> bool:
    """
    Hour-level overlap between an existing booking and a candidate slot.

    Only the hour component takes part; minutes are validated upstream
    but ignored here, so 09:30-10:30 collides with 09:00-10:00 while
    10:00-11:00 is free.
    """
    return (
        (existing_start <= start and existing_end > start)
        or (existing_start < end and existing_end >= end)
        or (existing_start >= start and existing_end <= end)
    )


def find_conflict(
    db: Session,
    room: str,
    day: dt.date,
    start: ClockTime,
    end: ClockTime,
    exclude_id: Optional[str] = None,
) -> Optional[str]:
    """Returns the id of the first booking in the same room and day that overlaps, if any."""
    query = db.query(Booking.id, Booking.start_hour, Booking.end_hour).filter(
        Booking.room == room,
        Booking.date == day,
    )
    if exclude_id is not None:
        query = query.filter(Booking.id != exclude_id)

    for booking_id, existing_start, existing_end in query:
        if hours_overlap(existing_start, existing_end, start.hour, end.hour):
            return booking_id
    return None


def has_conflict(
    db: Session,
    room: str,
    day: dt.date,
    start: ClockTime,
    end: ClockTime,
    exclude_id: Optional[str] = None,
) -> bool:
    # Advisory only: nothing stops a concurrent insert between this check and the commit.
    return find_conflict(db, room, day, start, end, exclude_id) is not None
