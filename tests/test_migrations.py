from __future__ import annotations

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from conftest import PROJECT_ROOT


@pytest.fixture
def migration_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'migrations.db'}")
    try:
        yield engine
    finally:
        engine.dispose()


def _alembic_config(connection) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.attributes["connection"] = connection
    return cfg


def test_upgrade_creates_schema_with_booking_uniqueness(migration_engine):
    with migration_engine.begin() as connection:
        command.upgrade(_alembic_config(connection), "head")

    inspector = inspect(migration_engine)
    assert {"users", "mentor_profiles", "sessions", "bookings"} <= set(inspector.get_table_names())

    unique = {uc["name"]: uc["column_names"] for uc in inspector.get_unique_constraints("bookings")}
    assert unique["uq_booking_session_student"] == ["session_id", "student_id"]


def test_downgrade_drops_every_table(migration_engine):
    with migration_engine.begin() as connection:
        cfg = _alembic_config(connection)
        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")

    assert set(inspect(migration_engine).get_table_names()) <= {"alembic_version"}
