from __future__ import annotations

import pytest

from mentorslot import models
from mentorslot.crud import user as user_crud
from mentorslot.models.user import Role
from mentorslot.scripts import seed as seed_script
from mentorslot.utils.security import authenticate_user


def test_create_user_normalizes_email_and_hashes_password(db_session):
    user = user_crud.create_user(db_session, "  Mixed.Case@Example.com ", "password123", Role.STUDENT)

    assert user.email == "mixed.case@example.com"
    assert user.password_hash != "password123"
    assert user.has_profile is False
    assert user_crud.get_user_by_email(db_session, "MIXED.CASE@example.com").id == user.id


def test_duplicate_email_is_rejected(db_session):
    user_crud.create_user(db_session, "dup@example.com", "password123", Role.MENTOR)

    with pytest.raises(user_crud.EmailAlreadyRegistered):
        user_crud.create_user(db_session, "DUP@example.com", "password123", Role.STUDENT)

    assert db_session.query(models.User).count() == 1


def test_authenticate_user(db_session):
    user_crud.create_user(db_session, "login@example.com", "password123", Role.STUDENT)

    assert authenticate_user(db_session, "Login@Example.com", "password123") is not None
    assert authenticate_user(db_session, "login@example.com", "wrong-password") is None
    assert authenticate_user(db_session, "nobody@example.com", "password123") is None


def test_upsert_mentor_profile_marks_user_onboarded(db_session):
    user = user_crud.create_user(db_session, "mentor.new@example.com", "password123", Role.MENTOR)

    profile = user_crud.upsert_mentor_profile(db_session, user.id, full_name="Ada Lovelace", preferred_language="English")
    assert profile.full_name == "Ada Lovelace"
    assert user_crud.get_user(db_session, user.id).has_profile is True

    updated = user_crud.upsert_mentor_profile(db_session, user.id, preferred_language="Spanish")
    assert updated.id == profile.id
    assert updated.full_name == "Ada Lovelace"
    assert updated.preferred_language == "Spanish"


def test_seed_is_idempotent():
    created = seed_script.seed()
    assert created == sum(len(m["sessions"]) for m in seed_script.SAMPLE_MENTORS)

    assert seed_script.seed() == 0
