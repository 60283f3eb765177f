# roombook/api/bookings.py

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from roombook.api.deps import get_current_user
from roombook.api.schemas import BookingOut, MessageOut
from roombook.core.conflicts import has_conflict
from roombook.core.errors import ApiError, Conflict, InternalError, NotFound
from roombook.core.validation import validate_booking_update, validate_new_booking
from roombook.database import get_db
from roombook.models.booking import Booking
from roombook.models.user import User as UserModel


# -------------------------------
# Router Configuration
# -------------------------------

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])

CONFLICT_MESSAGE = "Room is already booked for this time period"


def get_booking_or_404(db: Session, booking_id: str) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if booking is None:
        raise NotFound("Booking not found")
    return booking


# -------------------------------
# Collection Endpoints
# -------------------------------

@router.get("", response_model=List[BookingOut])
def list_bookings(
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Lists every booking, most recent date first.
    Requires a valid bearer token.
    """
    try:
        return db.query(Booking).order_by(Booking.date.desc(), Booking.created_at.desc()).all()
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Error fetching bookings")
        raise InternalError("Failed to fetch bookings") from e


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: dict = Body(...),
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Creates a booking owned by the authenticated user.
    Rejects the request with 409 when the room is already taken for an overlapping hour.
    """
    try:
        changes = validate_new_booking(data)

        owner = db.query(UserModel).filter(UserModel.id == current_user.id).first()
        if owner is None:
            raise NotFound("User not found")

        if has_conflict(db, changes.room, changes.date, changes.clock_start, changes.clock_end):
            raise Conflict(CONFLICT_MESSAGE)

        booking = Booking(user_id=owner.id, **changes.values)
        db.add(booking)
        db.commit()
        db.refresh(booking)

        logger.info("User %s booked room %s on %s", owner.id, booking.room, booking.date)
        return booking
    except ApiError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception("Error creating booking")
        raise InternalError("Failed to create booking") from e


# -------------------------------
# Item Endpoints
# -------------------------------

@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    try:
        return get_booking_or_404(db, booking_id)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Error fetching booking")
        raise InternalError("Failed to fetch booking") from e


# TODO: update and delete are open to any caller with the id; decide on an ownership check.
@router.put("/{booking_id}", response_model=BookingOut)
def update_booking(booking_id: str, data: dict = Body(...), db: Session = Depends(get_db)):
    """
    Applies a partial update. The conflict check is repeated, ignoring the
    booking itself, whenever room, date or clock times are part of the payload.
    """
    try:
        booking = get_booking_or_404(db, booking_id)
        changes = validate_booking_update(data, booking)

        if changes.reschedule and has_conflict(
            db,
            changes.room,
            changes.date,
            changes.clock_start,
            changes.clock_end,
            exclude_id=booking.id,
        ):
            raise Conflict(CONFLICT_MESSAGE)

        if changes.user_id is not None:
            if db.query(UserModel).filter(UserModel.id == changes.user_id).first() is None:
                raise NotFound("User not found")

        for column, value in changes.values.items():
            setattr(booking, column, value)
        db.commit()
        db.refresh(booking)

        logger.info("Updated booking %s (%s)", booking.id, ", ".join(sorted(changes.values)) or "no changes")
        return booking
    except ApiError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception("Error updating booking")
        raise InternalError("Failed to update booking") from e


@router.delete("/{booking_id}", response_model=MessageOut)
def delete_booking(booking_id: str, db: Session = Depends(get_db)):
    try:
        booking = get_booking_or_404(db, booking_id)
        db.delete(booking)
        db.commit()

        logger.info("Deleted booking %s", booking_id)
        return {"message": "Booking deleted successfully"}
    except ApiError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception("Error deleting booking")
        raise InternalError("Failed to delete booking") from e
