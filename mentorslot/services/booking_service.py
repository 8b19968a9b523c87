# mentorslot/services/booking_service.py
"""
Booking Engine - student reservations against sessions

The (session_id, student_id) pair is unique system-wide. That guarantee
comes from the uq_booking_session_student constraint: the engine inserts
optimistically and reads a constraint violation as AlreadyBooked. The
existence query before the insert only spares a round trip in the common
case; it is not what keeps two concurrent workers from both succeeding.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from mentorslot import models
from mentorslot.errors import (
    AlreadyBooked,
    BookingError,
    InternalError,
    SessionExpired,
    SessionFull,
    SessionNotFound,
    SessionUnavailable,
)
from mentorslot.models.booking import BookingStatus
from mentorslot.schemas.auth import Identity
from mentorslot.schemas.booking import BookingView, MyBookingView
from mentorslot.services.session_service import bookable_session_view
from mentorslot.utils.dates import resolve_now, utcnow

logger = logging.getLogger(__name__)


def booking_view(booking: models.Booking) -> BookingView:
    return BookingView(
        id=booking.id,
        session_id=booking.session_id,
        student_id=booking.student_id,
        status=booking.status,
        booked_date=booking.booked_date,
        booked_time=booking.booked_time,
        created_at=booking.created_at,
    )


# =====================================
# QUERIES
# =====================================

def _booking_exists(db: Session, session_id: int, student_id: int) -> bool:
    return db.query(models.Booking.id).filter(
        models.Booking.session_id == session_id,
        models.Booking.student_id == student_id,
    ).first() is not None


def _booking_count(db: Session, session_id: int) -> int:
    return db.query(func.count(models.Booking.id)).filter(
        models.Booking.session_id == session_id
    ).scalar() or 0


def _lock_session(db: Session, session_id: int) -> Optional[models.Session]:
    # FOR UPDATE serializes capacity checks on backends that support it.
    return db.query(models.Session).filter(
        models.Session.id == session_id
    ).with_for_update().first()


def _rollback_quietly(db: Session) -> None:
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed")


# =====================================
# BOOK
# =====================================

def book_session(
    db: Session,
    student: Identity,
    session_id: int,
    booked_date: str,
    booked_time: str,
    *,
    now: Optional[datetime] = None,
) -> models.Booking:
    """
    Reserve ``session_id`` for ``student``.

    Steps short-circuit in order: SessionNotFound, SessionUnavailable,
    SessionExpired, AlreadyBooked (fast path), SessionFull, then the
    uniqueness-constrained insert.

    Args:
        db: Database session
        student: Verified student identity
        session_id: Session to reserve
        booked_date: Date string chosen by the student
        booked_time: Time string chosen by the student
        now: Check instant (defaults to current UTC time)

    Returns:
        Persisted Booking with status PENDING

    Raises:
        BookingError subclasses, or InternalError on storage failure
    """
    current = resolve_now(now)

    try:
        session = db.query(models.Session).filter(models.Session.id == session_id).first()
        if session is None:
            raise SessionNotFound()
        if not session.is_active:
            raise SessionUnavailable()
        if session.scheduled_at <= current:
            raise SessionExpired()

        if _booking_exists(db, session_id, student.id):
            raise AlreadyBooked()

        locked = _lock_session(db, session_id)
        if locked is None:
            raise SessionNotFound()
        if _booking_count(db, session_id) >= locked.max_students:
            # The caller's own booking may have landed concurrently.
            if _booking_exists(db, session_id, student.id):
                raise AlreadyBooked()
            raise SessionFull()

        booking = models.Booking(
            session_id=session_id,
            student_id=student.id,
            status=BookingStatus.PENDING,
            booked_date=booked_date,
            booked_time=booked_time,
            created_at=utcnow(),
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
    except IntegrityError:
        _rollback_quietly(db)
        try:
            duplicate = _booking_exists(db, session_id, student.id)
        except SQLAlchemyError:
            logger.exception("Conflict lookup failed (session_id=%s)", session_id)
            raise InternalError()
        if duplicate:
            logger.info(
                "Duplicate booking rejected by constraint (session_id=%s, student_id=%s)",
                session_id,
                student.id,
            )
            raise AlreadyBooked()
        logger.exception("Booking insert violated an unexpected constraint (session_id=%s)", session_id)
        raise InternalError()
    except BookingError:
        _rollback_quietly(db)
        raise
    except SQLAlchemyError:
        _rollback_quietly(db)
        logger.exception("Booking failed (session_id=%s, student_id=%s)", session_id, student.id)
        raise InternalError()

    logger.info(
        "Booking %s created (session_id=%s, student_id=%s)",
        booking.id,
        session_id,
        student.id,
    )
    return booking


# =====================================
# LISTING
# =====================================

def list_my_bookings(db: Session, student: Identity) -> List[MyBookingView]:
    """The student's bookings with session and mentor display info, newest first."""
    bookings = (
        db.query(models.Booking)
        .options(
            joinedload(models.Booking.session)
            .joinedload(models.Session.mentor)
            .joinedload(models.User.mentor_profile)
        )
        .filter(models.Booking.student_id == student.id)
        .order_by(models.Booking.created_at.desc(), models.Booking.id.desc())
        .all()
    )
    return [
        MyBookingView(
            id=b.id,
            status=b.status,
            booked_date=b.booked_date,
            booked_time=b.booked_time,
            created_at=b.created_at,
            session=bookable_session_view(b.session),
        )
        for b in bookings
    ]
