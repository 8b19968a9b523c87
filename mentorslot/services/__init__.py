# mentorslot/services/__init__.py
from . import token_service
from . import session_service
from . import booking_service

__all__ = ["token_service", "session_service", "booking_service"]
