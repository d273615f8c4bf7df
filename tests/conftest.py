"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Generator

# Settings are cached on first import, so point them at throwaway resources first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="perfume-uploads-"))
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from perfume_catalog.api.upload import get_image_store
from perfume_catalog.core.db import get_session
from perfume_catalog.main import app
from perfume_catalog.models.base import Base
from perfume_catalog.services.image_store import ImageStore
from perfume_catalog.services.perfume_repository import PerfumeRepository

MAX_TEST_IMAGE_BYTES = 1024


@pytest.fixture
def db_engine():
    """Create a fresh in-memory SQLite engine per test."""
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the per-test engine."""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session: Session) -> PerfumeRepository:
    return PerfumeRepository(db_session)


@pytest.fixture
def image_store(tmp_path: Path) -> ImageStore:
    """ImageStore writing into a per-test directory with a tiny size ceiling."""
    return ImageStore(tmp_path / "uploads", url_prefix="/uploads", max_size_bytes=MAX_TEST_IMAGE_BYTES)


@pytest.fixture
def client(db_session: Session, image_store: ImageStore) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with overridden database session and image store."""

    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_image_store] = lambda: image_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def perfume_payload() -> dict[str, Any]:
    """A fully populated, valid request body."""
    return {
        "name": "Oud Royal",
        "brand": "Maison Ambre",
        "description": "Smoky oud with rose",
        "price": 120.25,
        "volume": 100,
        "category": "oriental",
        "notes_top": "saffron",
        "notes_middle": "rose",
        "notes_base": "oud, amber",
        "gender": "male",
        "image_url": "/uploads/perfume_example.jpg",
        "stock_quantity": 7,
        "is_available": True,
    }
