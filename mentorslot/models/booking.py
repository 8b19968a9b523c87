import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from mentorslot.database import Base
from mentorslot.utils.dates import utcnow


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"


# No transitions are defined yet; add (from, to) pairs here together with
# their guards when confirmation or cancellation is introduced.
BOOKING_TRANSITIONS = frozenset()


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return (current, target) in BOOKING_TRANSITIONS


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(BookingStatus, name="booking_status"), nullable=False, default=BookingStatus.PENDING)
    booked_date = Column(String(32), nullable=False)
    booked_time = Column(String(32), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    session = relationship("Session", back_populates="bookings")
    student = relationship("User", back_populates="bookings")

    __table_args__ = (
        # A student holds at most one booking per session, across all workers.
        UniqueConstraint("session_id", "student_id", name="uq_booking_session_student"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, session={self.session_id}, student={self.student_id}, status={self.status})>"
