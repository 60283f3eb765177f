# roombook/models/user.py

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from . import Base, new_id, utcnow


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for application users.
    Usernames are stored lower-cased; only the bcrypt hash of the password is kept.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(30), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    bookings = relationship("Booking", back_populates="user")
