"""
Tests for schema creation and Alembic migrations.
"""
import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError

from app.db.init_db import init_db
from app.db.migrate import run_migrations


def test_init_db_creates_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'init.db'}")

    init_db(engine)

    assert {"users", "counters"} <= set(inspect(engine).get_table_names())
    engine.dispose()


def test_init_db_fails_when_store_unreachable(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}")

    with pytest.raises(OperationalError):
        init_db(engine)


def test_migrations_create_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    run_migrations(url)
    # Second run is a no-op at head
    run_migrations(url)

    engine = create_engine(url)
    inspector = inspect(engine)
    assert {"users", "counters", "alembic_version"} <= set(inspector.get_table_names())
    unique = {c["name"] for c in inspector.get_unique_constraints("counters")}
    assert "uq_counters_user_date" in unique
    engine.dispose()
