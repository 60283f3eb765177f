# roombook/api/schemas.py

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class ClockOut(BaseModel):
    hours: int
    minutes: int


class UserOut(BaseModel):
    """
    Public view of a user. The password hash is never part of it.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    created_at: dt.datetime = Field(serialization_alias="createdAt")
    updated_at: dt.datetime = Field(serialization_alias="updatedAt")


class SigninOut(BaseModel):
    user: UserOut
    token: str


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str = Field(serialization_alias="userId")
    date: dt.date
    event: str
    clock_start: ClockOut = Field(serialization_alias="clockStart")
    clock_end: ClockOut = Field(serialization_alias="clockEnd")
    room: str
    pic: str
    kapasitas: int
    rapat: str
    catatan: str
    created_at: dt.datetime = Field(serialization_alias="createdAt")
    updated_at: dt.datetime = Field(serialization_alias="updatedAt")
    user: UserOut


class MessageOut(BaseModel):
    message: str
