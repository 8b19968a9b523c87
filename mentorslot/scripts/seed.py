"""
Seed sample mentors, profiles and sessions for local development.

Usage:
  SECRET_KEY=... python -m mentorslot.scripts.seed

Idempotent by email: existing mentors are left untouched and only get
sessions when they own none yet.
"""

import logging
import os
import sys
from datetime import datetime, timedelta

from mentorslot import models
from mentorslot.database import Base, SessionLocal, engine
from mentorslot.models.user import Role
from mentorslot.utils.dates import utcnow
from mentorslot.utils.security import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"

SAMPLE_MENTORS = [
    {
        "email": "sarah.johnson@example.com",
        "full_name": "Sarah Johnson",
        "expertise": "Mathematics, Physics, Chemistry",
        "bio": "Mathematics teacher with 12 years of experience in calculus and mechanics.",
        "hourly_rate": 150,
        "preferred_language": "English",
        "sessions": [
            ("Advanced Mathematics: Calculus Fundamentals", "Limits, derivatives and integrals.", "Mathematics", 60, 150, 1, "10:00", 5),
            ("Physics: Mechanics and Motion", "Newton's laws, kinematics and dynamics.", "Physics", 90, 180, 7, "14:00", 3),
        ],
    },
    {
        "email": "michael.chen@example.com",
        "full_name": "Michael Chen",
        "expertise": "Computer Science, Programming, Web Development",
        "bio": "Software engineer teaching programming fundamentals.",
        "hourly_rate": 180,
        "preferred_language": "English",
        "sessions": [
            ("Introduction to Python Programming", "Variables, loops, functions and data structures.", "Computer Science", 120, 200, 1, "15:00", 4),
            ("Web Development: HTML, CSS, and JavaScript", "Build and style your first website.", "Web Development", 90, 180, 7, "11:00", 6),
        ],
    },
    {
        "email": "emily.rodriguez@example.com",
        "full_name": "Emily Rodriguez",
        "expertise": "English Literature, Creative Writing, Essay Writing",
        "bio": "Literature specialist focused on writing and analysis.",
        "hourly_rate": 120,
        "preferred_language": "English",
        "sessions": [
            ("Essay Writing Masterclass", "Structure, argumentation and persuasion.", "English", 60, 120, 1, "16:00", 8),
            ("Shakespeare: Understanding the Classics", "Reading and analysing complex texts.", "Literature", 75, 140, 7, "13:00", 5),
        ],
    },
]


def _at(days_ahead: int, hhmm: str) -> datetime:
    hour, minute = (int(part) for part in hhmm.split(":"))
    day = (utcnow() + timedelta(days=days_ahead)).date()
    return datetime(day.year, day.month, day.day, hour, minute)


def seed(password: str = DEFAULT_PASSWORD) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    created_sessions = 0
    try:
        for sample in SAMPLE_MENTORS:
            mentor = db.query(models.User).filter(models.User.email == sample["email"]).first()
            if mentor is None:
                mentor = models.User(
                    email=sample["email"],
                    password_hash=get_password_hash(password),
                    role=Role.MENTOR,
                    has_profile=True,
                )
                db.add(mentor)
                db.flush()
                db.add(models.MentorProfile(
                    user_id=mentor.id,
                    full_name=sample["full_name"],
                    preferred_language=sample["preferred_language"],
                    expertise=sample["expertise"],
                    bio=sample["bio"],
                    hourly_rate=sample["hourly_rate"],
                ))
                logger.info("Created mentor %s", sample["email"])

            owns_sessions = db.query(models.Session.id).filter(
                models.Session.mentor_id == mentor.id
            ).first()
            if owns_sessions:
                continue

            for title, description, subject, duration, price, days_ahead, hhmm, max_students in sample["sessions"]:
                db.add(models.Session(
                    mentor_id=mentor.id,
                    title=title,
                    description=description,
                    subject=subject,
                    duration_minutes=duration,
                    price=price,
                    max_students=max_students,
                    scheduled_at=_at(days_ahead, hhmm),
                    is_active=True,
                ))
                created_sessions += 1

        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return created_sessions


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    try:
        created = seed(os.getenv("SEED_PASSWORD", DEFAULT_PASSWORD))
    except Exception as exc:
        print(f"Seeding failed: {exc}", file=sys.stderr)
        return 1
    print(f"Database seeded ({created} sessions created)")
    for sample in SAMPLE_MENTORS:
        print(f"   - {sample['email']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
