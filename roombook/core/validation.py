# roombook/core/validation.py

import datetime as dt
from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional

from roombook.core.errors import ValidationError


REQUIRED_BOOKING_FIELDS = (
    "date",
    "event",
    "clockStart",
    "clockEnd",
    "room",
    "pic",
    "kapasitas",
    "rapat",
    "catatan",
)

# request field -> column
TEXT_FIELDS = {
    "event": "event",
    "room": "room",
    "pic": "pic",
    "rapat": "rapat",
    "catatan": "catatan",
}

SCHEDULE_FIELDS = ("room", "date", "clockStart", "clockEnd")

TIME_FORMAT_ERROR = "Invalid time format. Must be { hours: number, minutes: number }"
CLOCK_FORMAT_ERROR = "Invalid clock format. Must be { hour: number, minute: number }"
TIME_ORDER_ERROR = "End time must be after start time"
DATE_FORMAT_ERROR = "Invalid date format"
CAPACITY_ERROR = "Invalid capacity"


class ClockTime(NamedTuple):
    hour: int
    minute: int

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def to_dict(self) -> dict:
        return {"hours": self.hour, "minutes": self.minute}


@dataclass
class BookingChanges:
    """Validated booking fields, keyed by column name, plus the resulting schedule."""
    values: dict
    room: str
    date: dt.date
    clock_start: ClockTime
    clock_end: ClockTime
    reschedule: bool = True
    user_id: Optional[str] = None


# -------------------------------
# Primitive parsers
# -------------------------------

def provided(value: Any) -> bool:
    """None, False, 0 and "" count as absent; empty mappings and lists do not."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_clock(value: Any, allow_singular: bool = False) -> Optional[ClockTime]:
    """
    Parses a {"hours", "minutes"} mapping into a ClockTime, or returns None.

    With allow_singular, {"hour", "minute"} is accepted as well; a component
    missing from one naming falls back to the other, then to 0.
    """
    if not isinstance(value, Mapping):
        return None

    if allow_singular:
        if not ({"hours", "minutes"} <= value.keys() or {"hour", "minute"} <= value.keys()):
            return None
        hour = value.get("hours", value.get("hour", 0))
        minute = value.get("minutes", value.get("minute", 0))
    else:
        hour = value.get("hours")
        minute = value.get("minutes")

    hour = _as_int(hour)
    minute = _as_int(minute)
    if hour is None or minute is None:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return ClockTime(hour, minute)


def is_before(start: ClockTime, end: ClockTime) -> bool:
    return start.total_minutes < end.total_minutes


def _utc_day(value: dt.datetime) -> dt.date:
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.date()


def parse_booking_date(value: Any) -> Optional[dt.date]:
    """
    Accepts an ISO date or datetime string; the time of day is dropped.
    Datetimes carrying an offset are moved to UTC first.
    """
    if isinstance(value, dt.datetime):
        return _utc_day(value)
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        return _utc_day(dt.datetime.fromisoformat(text))
    except ValueError:
        return None


def parse_capacity(value: Any) -> Optional[int]:
    capacity = _as_int(value)
    if capacity is None and isinstance(value, str) and value.strip().isdigit():
        capacity = int(value.strip())
    if capacity is None or capacity < 0:
        return None
    return capacity


def _text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Invalid value for field: {name}")
    return value


# -------------------------------
# Booking payloads
# -------------------------------

def validate_new_booking(data: Mapping) -> BookingChanges:
    for name in REQUIRED_BOOKING_FIELDS:
        if not provided(data.get(name)):
            raise ValidationError(f"Missing required field: {name}")

    booking_date = parse_booking_date(data["date"])
    if booking_date is None:
        raise ValidationError(DATE_FORMAT_ERROR)

    clock_start = parse_clock(data["clockStart"])
    clock_end = parse_clock(data["clockEnd"])
    if clock_start is None or clock_end is None:
        raise ValidationError(TIME_FORMAT_ERROR)
    if not is_before(clock_start, clock_end):
        raise ValidationError(TIME_ORDER_ERROR)

    capacity = parse_capacity(data["kapasitas"])
    if capacity is None:
        raise ValidationError(CAPACITY_ERROR)

    values = {column: _text(name, data[name]) for name, column in TEXT_FIELDS.items()}
    values.update(
        date=booking_date,
        kapasitas=capacity,
        start_hour=clock_start.hour,
        start_minute=clock_start.minute,
        end_hour=clock_end.hour,
        end_minute=clock_end.minute,
    )
    return BookingChanges(
        values=values,
        room=values["room"],
        date=booking_date,
        clock_start=clock_start,
        clock_end=clock_end,
    )


def validate_booking_update(data: Mapping, existing) -> BookingChanges:
    """
    Validates a partial update against the stored booking.

    Only fields present in the payload end up in values. The schedule
    (room, date, clock times) is re-resolved so the caller can run the
    conflict check when any part of it was touched.
    """
    values = {}

    booking_date = existing.date
    if provided(data.get("date")):
        booking_date = parse_booking_date(data["date"])
        if booking_date is None:
            raise ValidationError(DATE_FORMAT_ERROR)
        values["date"] = booking_date

    clock_start = ClockTime(existing.start_hour, existing.start_minute)
    clock_end = ClockTime(existing.end_hour, existing.end_minute)
    new_start = data.get("clockStart")
    new_end = data.get("clockEnd")
    if provided(new_start) or provided(new_end):
        clock_start = parse_clock(new_start if provided(new_start) else existing.clock_start, allow_singular=True)
        clock_end = parse_clock(new_end if provided(new_end) else existing.clock_end, allow_singular=True)
        if clock_start is None or clock_end is None:
            raise ValidationError(CLOCK_FORMAT_ERROR)
        if not is_before(clock_start, clock_end):
            raise ValidationError(TIME_ORDER_ERROR)
        values.update(
            start_hour=clock_start.hour,
            start_minute=clock_start.minute,
            end_hour=clock_end.hour,
            end_minute=clock_end.minute,
        )

    for name, column in TEXT_FIELDS.items():
        if name in data:
            values[column] = _text(name, data[name])
    room = values.get("room", existing.room)

    if "kapasitas" in data:
        capacity = parse_capacity(data["kapasitas"])
        if capacity is None:
            raise ValidationError(CAPACITY_ERROR)
        values["kapasitas"] = capacity

    user_id = data.get("userId")
    if provided(user_id):
        values["user_id"] = _text("userId", user_id)

    return BookingChanges(
        values=values,
        room=room,
        date=booking_date,
        clock_start=clock_start,
        clock_end=clock_end,
        reschedule=any(provided(data.get(name)) for name in SCHEDULE_FIELDS),
        user_id=values.get("user_id"),
    )
