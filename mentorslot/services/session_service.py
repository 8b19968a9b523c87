# mentorslot/services/session_service.py
"""
Session Registry - mentor-authored catalog of offered time slots.

Creation is mentor-only (enforced by the access gateway); listing is
role-scoped: mentors see their own sessions with bookings, everyone
authenticated sees the bookable catalog.
"""

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from mentorslot import models
from mentorslot.errors import InternalError, ValidationError
from mentorslot.schemas.auth import Identity
from mentorslot.schemas.session import (
    BookableSessionView,
    MentorInfo,
    OwnedSessionView,
    SessionBookingView,
    SessionCreate,
    SessionView,
    StudentInfo,
)
from mentorslot.utils.dates import resolve_now

logger = logging.getLogger(__name__)

UNKNOWN_MENTOR_NAME = "Unknown Mentor"
DEFAULT_LANGUAGE = "English"


# =====================================
# VIEW BUILDERS
# =====================================

def mentor_info(mentor: Optional[models.User]) -> MentorInfo:
    """Public display info; a missing profile degrades to placeholders."""
    profile = mentor.mentor_profile if mentor is not None else None
    full_name = (profile.full_name or "").strip() if profile else ""
    language = (profile.preferred_language or "").strip() if profile else ""
    return MentorInfo(
        full_name=full_name or UNKNOWN_MENTOR_NAME,
        language=language or DEFAULT_LANGUAGE,
    )


def _session_fields(session: models.Session) -> dict:
    return dict(
        id=session.id,
        mentor_id=session.mentor_id,
        title=session.title,
        description=session.description,
        subject=session.subject,
        duration=session.duration_minutes,
        price=session.price,
        max_students=session.max_students,
        date=session.scheduled_at.date().isoformat(),
        time=session.scheduled_at.strftime("%H:%M"),
        scheduled_at=session.scheduled_at,
        is_active=session.is_active,
        created_at=session.created_at,
    )


def session_view(session: models.Session) -> SessionView:
    return SessionView(**_session_fields(session))


def bookable_session_view(session: models.Session) -> BookableSessionView:
    return BookableSessionView(**_session_fields(session), mentor=mentor_info(session.mentor))


def owned_session_view(session: models.Session) -> OwnedSessionView:
    bookings = sorted(session.bookings, key=lambda b: (b.created_at, b.id))
    return OwnedSessionView(
        **_session_fields(session),
        bookings=[
            SessionBookingView(
                id=b.id,
                status=b.status,
                booked_date=b.booked_date,
                booked_time=b.booked_time,
                created_at=b.created_at,
                student=StudentInfo(email=b.student.email if b.student else ""),
            )
            for b in bookings
        ],
    )


# =====================================
# CREATE
# =====================================

def validate_session_spec(spec: Union[SessionCreate, Mapping[str, Any]]) -> SessionCreate:
    """
    Coerce raw input into a SessionCreate.

    Raises:
        ValidationError: duration outside [15, 240], negative price,
            max students outside [1, 20], blank text fields, or an
            unparseable date/time pair
    """
    if isinstance(spec, SessionCreate):
        return spec
    try:
        return SessionCreate.model_validate(dict(spec))
    except (PydanticValidationError, TypeError, ValueError):
        raise ValidationError("Invalid session data")


def create_session(
    db: Session,
    owner: Identity,
    spec: Union[SessionCreate, Mapping[str, Any]],
) -> models.Session:
    """
    Persist a new active session owned by ``owner``.

    Args:
        db: Database session
        owner: Verified mentor identity
        spec: Session creation input

    Returns:
        Created Session with is_active=True

    Raises:
        ValidationError: invalid input
        InternalError: storage failure
    """
    data = validate_session_spec(spec)

    new_session = models.Session(
        mentor_id=owner.id,
        title=data.title,
        description=data.description,
        subject=data.subject,
        duration_minutes=data.duration,
        price=data.price,
        max_students=data.max_students,
        scheduled_at=data.scheduled_at,
        is_active=True,
    )
    db.add(new_session)
    try:
        db.commit()
        db.refresh(new_session)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create session for mentor_id=%s", owner.id)
        raise InternalError()

    logger.info("Session %s created by mentor_id=%s", new_session.id, owner.id)
    return new_session


# =====================================
# LISTING
# =====================================

def list_owned_sessions(db: Session, owner: Identity) -> List[OwnedSessionView]:
    """All sessions owned by ``owner`` with their bookings, newest session first."""
    sessions = (
        db.query(models.Session)
        .options(selectinload(models.Session.bookings).joinedload(models.Booking.student))
        .filter(models.Session.mentor_id == owner.id)
        .order_by(models.Session.created_at.desc(), models.Session.id.desc())
        .all()
    )
    return [owned_session_view(s) for s in sessions]


def list_bookable(db: Session, now: Optional[datetime] = None) -> List[BookableSessionView]:
    """Active sessions scheduled strictly after ``now``, soonest first."""
    current = resolve_now(now)
    sessions = (
        db.query(models.Session)
        .options(joinedload(models.Session.mentor).joinedload(models.User.mentor_profile))
        .filter(
            models.Session.is_active.is_(True),
            models.Session.scheduled_at > current,
        )
        .order_by(models.Session.scheduled_at.asc(), models.Session.id.asc())
        .all()
    )
    logger.debug("Found %d bookable sessions", len(sessions))
    return [bookable_session_view(s) for s in sessions]
