import enum

from sqlalchemy import Column, Integer, String, Boolean, Float, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from mentorslot.database import Base
from mentorslot.utils.dates import utcnow


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    MENTOR = "MENTOR"


# ---------------- USER (IDENTITY TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False)
    # Flipped once by profile onboarding; read-only for the booking core.
    has_profile = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    mentor_profile = relationship("MentorProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    mentor_sessions = relationship("Session", back_populates="mentor")
    bookings = relationship("Booking", back_populates="student")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


# ---------------- MENTOR PROFILE TABLE ----------------
class MentorProfile(Base):
    __tablename__ = "mentor_profiles"

    id: int = Column(Integer, primary_key=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    full_name: str = Column(String(100), nullable=False)
    preferred_language: str = Column(String(50))
    expertise: str = Column(String(255))
    bio: str = Column(String(1000))
    hourly_rate: float = Column(Float)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="mentor_profile")
