# tests/test_conflicts.py

import datetime as dt

import pytest

from roombook.core.conflicts import find_conflict, has_conflict, hours_overlap
from roombook.core.validation import ClockTime
from roombook.database import create_db_engine, create_session_factory, init_db
from roombook.models import Booking, User


@pytest.mark.parametrize(
    "existing, candidate, expected",
    [
        ((9, 10), (9, 10), True),     # identical
        ((9, 11), (10, 11), True),    # candidate starts inside
        ((10, 12), (9, 11), True),    # candidate ends inside
        ((10, 11), (9, 12), True),    # candidate contains existing
        ((9, 12), (10, 11), True),    # existing contains candidate
        ((9, 10), (10, 11), False),   # adjacent after
        ((10, 11), (9, 10), False),   # adjacent before
        ((8, 9), (13, 14), False),    # disjoint
    ],
)
def test_hours_overlap(existing, candidate, expected):
    assert hours_overlap(*existing, *candidate) is expected


def test_hours_overlap_is_symmetric_for_sample_grid():
    slots = [(s, e) for s in range(0, 24) for e in range(s + 1, 24)][::7]
    for a in slots:
        for b in slots:
            assert hours_overlap(*a, *b) == hours_overlap(*b, *a)


@pytest.fixture
def db():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    session = create_session_factory(engine)()
    owner = User(username="owner", hashed_password="x")
    session.add(owner)
    session.commit()
    session.info["owner_id"] = owner.id
    yield session
    session.close()


def add_booking(db, room, day, start, end):
    booking = Booking(
        user_id=db.info["owner_id"],
        date=day,
        event="Standup",
        start_hour=start[0],
        start_minute=start[1],
        end_hour=end[0],
        end_minute=end[1],
        room=room,
        pic="Sari",
        kapasitas=4,
        rapat="Daily",
        catatan="-",
    )
    db.add(booking)
    db.commit()
    return booking


def test_conflict_scoped_to_room_and_date(db):
    day = dt.date(2024, 1, 1)
    existing = add_booking(db, "A", day, (9, 0), (10, 0))

    assert find_conflict(db, "A", day, ClockTime(9, 30), ClockTime(10, 30)) == existing.id
    assert not has_conflict(db, "B", day, ClockTime(9, 0), ClockTime(10, 0))
    assert not has_conflict(db, "A", dt.date(2024, 1, 2), ClockTime(9, 0), ClockTime(10, 0))


def test_minutes_are_ignored(db):
    day = dt.date(2024, 1, 1)
    add_booking(db, "A", day, (9, 0), (9, 30))

    # 09:45 does not overlap 09:00-09:30 by minutes, but shares hour 9
    assert has_conflict(db, "A", day, ClockTime(9, 45), ClockTime(10, 0))
    assert not has_conflict(db, "A", day, ClockTime(10, 0), ClockTime(11, 0))


def test_exclude_id_skips_booking_itself(db):
    day = dt.date(2024, 1, 1)
    existing = add_booking(db, "A", day, (9, 0), (10, 0))

    assert not has_conflict(db, "A", day, ClockTime(9, 0), ClockTime(10, 0), exclude_id=existing.id)
