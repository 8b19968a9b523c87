# mentorslot/models/session.py
from sqlalchemy import Column, Integer, String, Text, Boolean, Float, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from mentorslot.database import Base
from mentorslot.utils.dates import utcnow


class Session(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    mentor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    subject = Column(String(100), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, default=0)
    max_students = Column(Integer, nullable=False, default=1)
    scheduled_at = Column(DateTime, nullable=False, index=True)  # naive UTC
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    mentor = relationship("User", back_populates="mentor_sessions")
    bookings = relationship("Booking", back_populates="session", order_by="Booking.created_at")

    __table_args__ = (
        CheckConstraint("duration_minutes BETWEEN 15 AND 240", name="check_session_duration"),
        CheckConstraint("price >= 0", name="check_session_price"),
        CheckConstraint("max_students BETWEEN 1 AND 20", name="check_session_max_students"),
    )

    def __repr__(self) -> str:
        return f"<Session(id={self.id}, mentor={self.mentor_id}, scheduled_at={self.scheduled_at})>"
