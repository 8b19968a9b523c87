"""
Failure taxonomy shared by the token service, access gateway, session
registry and booking engine.

Every error carries a stable ``kind`` and a human-readable ``message``; the
HTTP layer renders both and never adds storage-level detail.
"""

from typing import Optional


class MentorSlotError(Exception):
    kind = "InternalError"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class InvalidToken(MentorSlotError):
    """Malformed, tampered or expired token. Never surfaced directly."""

    kind = "InvalidToken"
    status_code = 401
    default_message = "Invalid token"


# ---------------- ACCESS GATEWAY ----------------

class Unauthenticated(MentorSlotError):
    kind = "Unauthenticated"
    status_code = 401
    default_message = "Authentication required"


class Forbidden(MentorSlotError):
    kind = "Forbidden"
    status_code = 403
    default_message = "Access denied"


# ---------------- INPUT ----------------

class ValidationError(MentorSlotError):
    kind = "ValidationError"
    status_code = 400
    default_message = "Invalid request data"


# ---------------- BOOKING ENGINE ----------------

class BookingError(MentorSlotError):
    status_code = 400


class SessionNotFound(BookingError):
    kind = "SessionNotFound"
    status_code = 404
    default_message = "Session not found"


class SessionUnavailable(BookingError):
    kind = "SessionUnavailable"
    default_message = "Session is not available"


class SessionExpired(BookingError):
    kind = "SessionExpired"
    default_message = "Session has already passed"


class AlreadyBooked(BookingError):
    kind = "AlreadyBooked"
    status_code = 409
    default_message = "You have already booked this session"


class SessionFull(BookingError):
    kind = "SessionFull"
    status_code = 409
    default_message = "Session is fully booked"


class InternalError(MentorSlotError):
    kind = "InternalError"
    status_code = 500
    default_message = "Failed to process request"
