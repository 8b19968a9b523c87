# mentorslot/schemas/__init__.py

# Auth schemas
from .auth import Identity, Token, RegisterRequest, RegisterResponse, LoginRequest

# Session schemas
from .session import (
    SessionCreate,
    MentorInfo,
    StudentInfo,
    SessionBookingView,
    SessionView,
    BookableSessionView,
    OwnedSessionView,
    SessionEnvelope,
    BookableSessionList,
    OwnedSessionList,
)

# Booking schemas
from .booking import BookingCreate, BookingView, BookingCreated, MyBookingView, MyBookingList

__all__ = [
    "Identity",
    "Token",
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "SessionCreate",
    "MentorInfo",
    "StudentInfo",
    "SessionBookingView",
    "SessionView",
    "BookableSessionView",
    "OwnedSessionView",
    "SessionEnvelope",
    "BookableSessionList",
    "OwnedSessionList",
    "BookingCreate",
    "BookingView",
    "BookingCreated",
    "MyBookingView",
    "MyBookingList",
]
