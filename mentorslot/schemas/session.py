from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from mentorslot.models.booking import BookingStatus
from mentorslot.utils.dates import combine_schedule


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ======================
# SESSION REQUEST MODELS
# ======================

class SessionCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=100)
    duration: int = Field(..., ge=15, le=240)
    price: float = Field(..., ge=0)
    date: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    max_students: int = Field(..., ge=1, le=20)

    @model_validator(mode="after")
    def _check_schedule(self):
        combine_schedule(self.date, self.time)
        return self

    @property
    def scheduled_at(self) -> datetime:
        return combine_schedule(self.date, self.time)


# ======================
# SESSION RESPONSE MODELS
# ======================

class MentorInfo(CamelModel):
    full_name: str
    language: str


class StudentInfo(CamelModel):
    email: str


class SessionBookingView(CamelModel):
    """A booking as the owning mentor sees it."""
    id: int
    status: BookingStatus
    booked_date: str
    booked_time: str
    created_at: datetime
    student: StudentInfo


class SessionView(CamelModel):
    id: int
    mentor_id: int
    title: str
    description: str
    subject: str
    duration: int
    price: float
    max_students: int
    date: str
    time: str
    scheduled_at: datetime
    is_active: bool
    created_at: datetime


class BookableSessionView(SessionView):
    mentor: MentorInfo


class OwnedSessionView(SessionView):
    bookings: List[SessionBookingView] = []


class SessionEnvelope(CamelModel):
    session: SessionView


class BookableSessionList(CamelModel):
    sessions: List[BookableSessionView]


class OwnedSessionList(CamelModel):
    sessions: List[OwnedSessionView]
