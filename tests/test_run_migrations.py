"""Tests for the Alembic migration runner script."""
from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, inspect

from perfume_catalog.models import Base
from scripts.run_migrations import current_revision, prepare_database, run_migrations

HEAD = "001_initial"


def sqlite_url(path: Path) -> str:
    return f"sqlite:///{path}"


class TestRunMigrations:
    """Test suite for scripts/run_migrations.py."""

    def test_prepare_creates_sqlite_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "data" / "perfumes.db"

        assert prepare_database(sqlite_url(db_path)) is True
        assert db_path.parent.is_dir()

    def test_upgrade_creates_schema(self, tmp_path: Path) -> None:
        url = sqlite_url(tmp_path / "perfumes.db")
        assert current_revision(url) is None

        assert run_migrations(url) == HEAD

        engine = create_engine(url)
        try:
            inspector = inspect(engine)
            assert inspector.has_table("perfumes")
            assert "ix_perfumes_available_created" in {ix["name"] for ix in inspector.get_indexes("perfumes")}
        finally:
            engine.dispose()

    def test_second_run_is_a_no_op(self, tmp_path: Path) -> None:
        url = sqlite_url(tmp_path / "perfumes.db")
        run_migrations(url)

        assert run_migrations(url) == HEAD
        assert current_revision(url) == HEAD

    def test_adopts_tables_created_on_startup(self, tmp_path: Path) -> None:
        url = sqlite_url(tmp_path / "perfumes.db")
        engine = create_engine(url)
        Base.metadata.create_all(engine)
        engine.dispose()

        assert run_migrations(url) == HEAD
