"""Pytest bootstrap for project imports and test settings."""

import os
from pathlib import Path
import sys

# Ensure project root is on sys.path so `import mentorslot` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Settings are read once at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentorslot import models
from mentorslot.database import Base
from mentorslot.models.user import Role
from mentorslot.schemas.auth import Identity


def build_engine(url: str = "sqlite://"):
    if url == "sqlite://":
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False, "timeout": 30})

        # File databases take the write lock up front so concurrent writers
        # queue on the busy timeout instead of failing lock promotion.
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_engine():
    engine = build_engine()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(db_engine):
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_user(db, email: str, role: Role, *, full_name=None, language=None) -> models.User:
    user = models.User(
        email=email,
        password_hash="hash",
        role=role,
        has_profile=full_name is not None,
    )
    db.add(user)
    db.flush()
    if full_name is not None:
        db.add(models.MentorProfile(
            user_id=user.id,
            full_name=full_name,
            preferred_language=language,
        ))
    db.commit()
    db.refresh(user)
    return user


def identity_of(user: models.User) -> Identity:
    return Identity(id=user.id, email=user.email, role=user.role)


@pytest.fixture
def mentor(db_session) -> Identity:
    user = create_user(db_session, "mentor@example.com", Role.MENTOR, full_name="Sarah Johnson", language="French")
    return identity_of(user)


@pytest.fixture
def student(db_session) -> Identity:
    return identity_of(create_user(db_session, "student.a@example.com", Role.STUDENT))


@pytest.fixture
def other_student(db_session) -> Identity:
    return identity_of(create_user(db_session, "student.b@example.com", Role.STUDENT))
