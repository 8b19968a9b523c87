# mentorslot/api/booking.py
"""Student bookings: reserve a session and list my reservations."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentorslot.database import get_db
from mentorslot.schemas.auth import Identity
from mentorslot.schemas.booking import BookingCreate, BookingCreated, MyBookingList
from mentorslot.services import booking_service
from mentorslot.utils.security import require_student

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    identity: Identity = Depends(require_student),
    db: Session = Depends(get_db),
):
    booking = booking_service.book_session(
        db,
        identity,
        payload.session_id,
        payload.booked_date,
        payload.booked_time,
    )
    return BookingCreated(
        message="Session booked successfully",
        booking=booking_service.booking_view(booking),
    )


@router.get("", response_model=MyBookingList)
def get_my_bookings(
    identity: Identity = Depends(require_student),
    db: Session = Depends(get_db),
):
    return MyBookingList(bookings=booking_service.list_my_bookings(db, identity))
