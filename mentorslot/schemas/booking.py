from datetime import datetime
from typing import List

from pydantic import ConfigDict, Field

from mentorslot.models.booking import BookingStatus
from mentorslot.schemas.session import BookableSessionView, CamelModel


class BookingCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    session_id: int
    booked_date: str = Field(..., min_length=1, max_length=32)
    booked_time: str = Field(..., min_length=1, max_length=32)


class BookingView(CamelModel):
    id: int
    session_id: int
    student_id: int
    status: BookingStatus
    booked_date: str
    booked_time: str
    created_at: datetime


class BookingCreated(CamelModel):
    message: str
    booking: BookingView


class MyBookingView(CamelModel):
    """A student's booking joined with its session and mentor display info."""
    id: int
    status: BookingStatus
    booked_date: str
    booked_time: str
    created_at: datetime
    session: BookableSessionView


class MyBookingList(CamelModel):
    bookings: List[MyBookingView]
