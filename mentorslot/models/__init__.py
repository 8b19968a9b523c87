# mentorslot/models/__init__.py
# Import models in dependency order
from .user import Role, User, MentorProfile
from .session import Session
from .booking import Booking, BookingStatus

__all__ = ["Role", "User", "MentorProfile", "Session", "Booking", "BookingStatus"]
