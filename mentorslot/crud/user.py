from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mentorslot import models
from mentorslot.models.user import Role
from mentorslot.utils.security import get_password_hash


class EmailAlreadyRegistered(ValueError):
    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(db: Session, email: str, password: str, role: Role) -> models.User:
    """Insert a user; the unique email index is the source of truth for duplicates."""
    db_user = models.User(
        email=normalize_email(email),
        password_hash=get_password_hash(password),
        role=role,
        has_profile=False,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailAlreadyRegistered("User with this email already exists")
    db.refresh(db_user)
    return db_user


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == normalize_email(email)).first()


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_mentor_profile(db: Session, user_id: int) -> Optional[models.MentorProfile]:
    return db.query(models.MentorProfile).filter(models.MentorProfile.user_id == user_id).first()


def upsert_mentor_profile(db: Session, user_id: int, **fields) -> models.MentorProfile:
    profile = get_mentor_profile(db, user_id)
    if profile is None:
        profile = models.MentorProfile(user_id=user_id, **fields)
        db.add(profile)
    else:
        for key, value in fields.items():
            setattr(profile, key, value)
    user = get_user(db, user_id)
    if user is not None:
        user.has_profile = True
    db.commit()
    db.refresh(profile)
    return profile
