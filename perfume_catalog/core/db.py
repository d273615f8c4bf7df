"""Database session/engine helpers."""
import logging
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import get_settings

logger = logging.getLogger(__name__)

_settings = get_settings()


def _engine_options(database_url: str) -> dict[str, Any]:
    """SQLite connections are shared across the threadpool FastAPI runs sync work on."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(
    _settings.database_url,
    future=True,
    **_engine_options(_settings.database_url),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a database session."""

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db() -> None:
    """Create the catalog tables if they do not exist yet."""
    # Imported here so every model is registered on the metadata first.
    from perfume_catalog.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")
