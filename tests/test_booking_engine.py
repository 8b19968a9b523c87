from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from mentorslot import models
from mentorslot.errors import (
    AlreadyBooked,
    InternalError,
    SessionExpired,
    SessionFull,
    SessionNotFound,
    SessionUnavailable,
)
from mentorslot.models.booking import BookingStatus, can_transition
from mentorslot.models.user import Role
from mentorslot.services import booking_service, session_service

from conftest import create_user, identity_of

NOW = datetime(2025, 1, 1, 12, 0)


def _create_session(db, mentor, **overrides):
    spec = {
        "title": "Essay Writing Masterclass",
        "description": "Structure, argumentation and persuasion.",
        "subject": "English",
        "duration": 60,
        "price": 120,
        "date": "2025-01-10",
        "time": "09:00",
        "maxStudents": 8,
    }
    spec.update(overrides)
    return session_service.create_session(db, mentor, spec)


def test_example_scenario(db_session, mentor, student, other_student):
    session = _create_session(db_session, mentor)
    assert session.scheduled_at == datetime(2025, 1, 10, 9, 0)
    assert session.is_active is True

    booking = booking_service.book_session(
        db_session, student, session.id, "2025-01-10", "09:00", now=NOW
    )
    assert booking.status is BookingStatus.PENDING
    assert booking.session_id == session.id
    assert booking.student_id == student.id
    assert booking.booked_date == "2025-01-10"
    assert booking.booked_time == "09:00"

    with pytest.raises(AlreadyBooked):
        booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    other = booking_service.book_session(
        db_session, other_student, session.id, "2025-01-10", "09:00", now=NOW
    )
    assert other.status is BookingStatus.PENDING
    assert db_session.query(models.Booking).filter_by(session_id=session.id).count() == 2


def test_unknown_session_is_not_found(db_session, student):
    with pytest.raises(SessionNotFound):
        booking_service.book_session(db_session, student, 9999, "2025-01-10", "09:00", now=NOW)


@pytest.mark.parametrize("date_value", ["2020-01-01", "2025-01-10", "2030-06-01"])
def test_inactive_session_is_unavailable_regardless_of_date(db_session, mentor, student, date_value):
    session = _create_session(db_session, mentor, date=date_value)
    session.is_active = False
    db_session.commit()

    with pytest.raises(SessionUnavailable):
        booking_service.book_session(db_session, student, session.id, date_value, "09:00", now=NOW)


def test_past_active_session_is_expired(db_session, mentor, student):
    session = _create_session(db_session, mentor, date="2024-12-31")

    with pytest.raises(SessionExpired):
        booking_service.book_session(db_session, student, session.id, "2024-12-31", "09:00", now=NOW)


def test_session_starting_exactly_now_is_expired(db_session, mentor, student):
    session = _create_session(db_session, mentor, date="2025-01-01", time="12:00")

    with pytest.raises(SessionExpired):
        booking_service.book_session(db_session, student, session.id, "2025-01-01", "12:00", now=NOW)


def test_default_clock_rejects_elapsed_session(db_session, mentor, student):
    session = _create_session(db_session, mentor, date="2020-01-01")

    with pytest.raises(SessionExpired):
        booking_service.book_session(db_session, student, session.id, "2020-01-01", "09:00")


def test_checks_short_circuit_in_order(db_session, mentor, student):
    # Inactive and past: unavailability is reported first.
    session = _create_session(db_session, mentor, date="2020-01-01")
    session.is_active = False
    db_session.commit()

    with pytest.raises(SessionUnavailable):
        booking_service.book_session(db_session, student, session.id, "2020-01-01", "09:00", now=NOW)


def test_full_session_rejects_new_students(db_session, mentor, student, other_student):
    session = _create_session(db_session, mentor, maxStudents=1)
    booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    with pytest.raises(SessionFull):
        booking_service.book_session(db_session, other_student, session.id, "2025-01-10", "09:00", now=NOW)

    # The original holder still gets AlreadyBooked, not SessionFull.
    with pytest.raises(AlreadyBooked):
        booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)


def test_constraint_violation_is_reported_as_already_booked(db_session, mentor, student, monkeypatch):
    session = _create_session(db_session, mentor)
    booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    # Simulate a concurrent writer that slipped past the fast-path read.
    real_exists = booking_service._booking_exists
    calls = {"n": 0}

    def stale_first_read(db, session_id, student_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return False
        return real_exists(db, session_id, student_id)

    monkeypatch.setattr(booking_service, "_booking_exists", stale_first_read)

    with pytest.raises(AlreadyBooked):
        booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    assert db_session.query(models.Booking).count() == 1


def test_storage_failure_is_opaque_internal_error(db_session, mentor, student, monkeypatch):
    session = _create_session(db_session, mentor)

    def broken_count(db, session_id):
        raise OperationalError("SELECT count(*)", {}, Exception("disk I/O error"))

    monkeypatch.setattr(booking_service, "_booking_count", broken_count)

    with pytest.raises(InternalError) as excinfo:
        booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    assert "disk" not in excinfo.value.message
    assert excinfo.value.to_dict() == {"error": "InternalError", "detail": "Failed to process request"}


def test_list_my_bookings_newest_first_with_session_and_mentor(db_session, mentor, student, other_student):
    first = _create_session(db_session, mentor, title="First", date="2025-01-10")
    second = _create_session(db_session, mentor, title="Second", date="2025-01-20")
    booking_service.book_session(db_session, student, first.id, "2025-01-10", "09:00", now=NOW)
    booking_service.book_session(db_session, student, second.id, "2025-01-20", "09:00", now=NOW)
    booking_service.book_session(db_session, other_student, first.id, "2025-01-10", "09:00", now=NOW)

    mine = booking_service.list_my_bookings(db_session, student)

    assert [b.session.id for b in mine] == [second.id, first.id]
    assert all(b.status is BookingStatus.PENDING for b in mine)
    assert mine[0].session.title == "Second"
    assert mine[0].session.mentor.full_name == "Sarah Johnson"


def test_list_my_bookings_uses_placeholders_without_profile(db_session, student):
    bare = identity_of(create_user(db_session, "bare@example.com", Role.MENTOR))
    session = _create_session(db_session, bare)
    booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    mine = booking_service.list_my_bookings(db_session, student)

    assert mine[0].session.mentor.full_name == "Unknown Mentor"
    assert mine[0].session.mentor.language == "English"


def test_pending_has_no_transitions():
    assert can_transition(BookingStatus.PENDING, BookingStatus.PENDING) is False


def test_tz_aware_now_is_normalized(db_session, mentor, student):
    session = _create_session(db_session, mentor, date="2025-01-01", time="13:00")
    # 12:30 UTC expressed in UTC+02:00
    aware_now = datetime(2025, 1, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

    booking = booking_service.book_session(
        db_session, student, session.id, "2025-01-01", "13:00", now=aware_now
    )
    assert booking.id is not None


def test_failed_reload_after_commit_is_internal_error(db_session, mentor, student, monkeypatch):
    session = _create_session(db_session, mentor)

    def broken_refresh(instance, *args, **kwargs):
        raise OperationalError("SELECT bookings", {}, Exception("connection reset"))

    monkeypatch.setattr(db_session, "refresh", broken_refresh)

    with pytest.raises(InternalError) as excinfo:
        booking_service.book_session(db_session, student, session.id, "2025-01-10", "09:00", now=NOW)

    assert excinfo.value.to_dict() == {"error": "InternalError", "detail": "Failed to process request"}
