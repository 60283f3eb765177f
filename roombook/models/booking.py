# roombook/models/booking.py

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from . import Base, new_id, utcnow


# -------------------------------
# Booking Model
# -------------------------------

class Booking(Base):
    """
    A reservation of a room for an event on a calendar day.
    Clock times are kept as separate hour/minute columns and exposed
    as {"hours", "minutes"} mappings through clock_start / clock_end.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_room_date", "room", "date"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    event = Column(String, nullable=False)
    start_hour = Column(Integer, nullable=False)
    start_minute = Column(Integer, nullable=False)
    end_hour = Column(Integer, nullable=False)
    end_minute = Column(Integer, nullable=False)
    room = Column(String, nullable=False)
    pic = Column(String, nullable=False)
    kapasitas = Column(Integer, nullable=False)
    rapat = Column(Text, nullable=False)
    catatan = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="bookings", lazy="joined")

    @property
    def clock_start(self) -> dict:
        return {"hours": self.start_hour, "minutes": self.start_minute}

    @property
    def clock_end(self) -> dict:
        return {"hours": self.end_hour, "minutes": self.end_minute}
