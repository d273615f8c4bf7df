#!/usr/bin/env python3
"""Bring the perfumes schema up to the latest Alembic revision.

Meant for deployments that run with CREATE_TABLES_ON_STARTUP=false. SQLite
files are migrated in place; Postgres is polled briefly in case the server is
still starting.
"""
import logging
import sys
import time
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from perfume_catalog.core.config import get_settings

logger = logging.getLogger(__name__)


def alembic_config(database_url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    # ConfigParser interpolation would choke on url-encoded passwords
    cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return cfg


def prepare_database(database_url: str, retries: int = 10, interval: float = 2.0) -> bool:
    """Make sure the database can be reached before migrating.

    Returns:
        True once a connection succeeds, False after ``retries`` failed attempts
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return True

    engine = create_engine(database_url, pool_pre_ping=True)
    try:
        for attempt in range(1, retries + 1):
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                return True
            except OperationalError as e:
                logger.warning(f"Database not reachable (attempt {attempt}/{retries}): {e}")
                if attempt < retries:
                    time.sleep(interval)
        return False
    finally:
        engine.dispose()


def current_revision(database_url: str) -> str | None:
    """Revision recorded in ``alembic_version``, or None for an unmanaged database."""
    engine = create_engine(database_url)
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()


def run_migrations(database_url: str) -> str | None:
    """Upgrade to head and return the revision the database ends up at.

    Tables created earlier by ``init_db`` are adopted: the initial revision
    only creates what is missing.
    """
    cfg = alembic_config(database_url)
    head = ScriptDirectory.from_config(cfg).get_current_head()
    before = current_revision(database_url)
    if before == head:
        logger.info(f"Schema already at {head}")
        return before

    logger.info(f"Upgrading schema from {before or 'unversioned'} to {head}")
    command.upgrade(cfg, "head")
    return current_revision(database_url)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
    database_url = get_settings().database_url

    if not prepare_database(database_url):
        logger.error("Database is not available, giving up")
        return 1

    revision = run_migrations(database_url)
    logger.info(f"Schema is at revision {revision}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
