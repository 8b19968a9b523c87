# mentorslot/api/session.py
"""Bookable session catalog, visible to any authenticated identity."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mentorslot.database import get_db
from mentorslot.schemas.auth import Identity
from mentorslot.schemas.session import BookableSessionList
from mentorslot.services import session_service
from mentorslot.utils.security import get_current_identity

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=BookableSessionList)
@router.get("/", response_model=BookableSessionList, include_in_schema=False)
def get_bookable_sessions(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Active future sessions, soonest first, with mentor display info"""
    return BookableSessionList(sessions=session_service.list_bookable(db))
