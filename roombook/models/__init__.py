# roombook/models/__init__.py

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base


Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


from .user import User  # noqa: E402
from .booking import Booking  # noqa: E402

__all__ = ["Base", "Booking", "User", "new_id", "utcnow"]
