# mentorslot/api/mentor.py
"""Mentor-only session authoring and the mentor's own catalog."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentorslot.database import get_db
from mentorslot.schemas.auth import Identity
from mentorslot.schemas.session import OwnedSessionList, SessionCreate, SessionEnvelope
from mentorslot.services import session_service
from mentorslot.utils.security import require_mentor

router = APIRouter(prefix="/mentor", tags=["Mentor"])


@router.post("/sessions", response_model=SessionEnvelope, status_code=status.HTTP_201_CREATED)
def create_session(
    spec: SessionCreate,
    identity: Identity = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    created = session_service.create_session(db, identity, spec)
    return SessionEnvelope(session=session_service.session_view(created))


@router.get("/sessions", response_model=OwnedSessionList)
def get_my_sessions(
    identity: Identity = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    """Sessions owned by the caller, newest first, each with its bookings"""
    return OwnedSessionList(sessions=session_service.list_owned_sessions(db, identity))
