"""Perfume repository: the only module that talks to the perfumes table."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterator

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from perfume_catalog.models.perfume import Perfume
from perfume_catalog.schemas.perfume import PerfumeCreate, PerfumeRecord
from perfume_catalog.services.errors import StoreError

logger = logging.getLogger(__name__)

SEARCHABLE_COLUMNS = (Perfume.name, Perfume.brand, Perfume.description, Perfume.category)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column_values(perfume: PerfumeCreate) -> dict[str, Any]:
    values = perfume.model_dump()
    for key, value in values.items():
        if isinstance(value, Enum):
            values[key] = value.value
    return values


class PerfumeRepository:
    """Handles database operations for Perfume entities.

    Every public method runs a single statement and commits it, so each call is
    atomic on its own. Results are returned as PerfumeRecord snapshots rather
    than live ORM instances.
    """

    def __init__(self, session: Session) -> None:
        """Initialize repository with a SQLAlchemy session.

        Args:
            session: Active database session for executing queries
        """
        self._session = session

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Store failure while trying to {action}: {e}")
            raise StoreError(str(e)) from e

    def _active(self) -> Query:
        return (
            self._session.query(Perfume)
            .populate_existing()
            .filter(Perfume.is_available.is_(True))
            .order_by(Perfume.created_at.desc(), Perfume.id.desc())
        )

    def list_active(self) -> list[PerfumeRecord]:
        """Return every available perfume, newest first."""
        with self._store_errors("list perfumes"):
            rows = self._active().all()
            return [PerfumeRecord.model_validate(row) for row in rows]

    def get_active(self, perfume_id: int) -> PerfumeRecord | None:
        """Fetch an available perfume by ID.

        Args:
            perfume_id: Database identifier

        Returns:
            PerfumeRecord if the row exists and is available, None otherwise
        """
        with self._store_errors(f"fetch perfume {perfume_id}"):
            row = self._active().filter(Perfume.id == perfume_id).first()
            return PerfumeRecord.model_validate(row) if row is not None else None

    def get_any(self, perfume_id: int) -> PerfumeRecord | None:
        """Fetch a perfume by ID regardless of its availability flag."""
        with self._store_errors(f"fetch perfume {perfume_id}"):
            row = self._session.get(Perfume, perfume_id, populate_existing=True)
            return PerfumeRecord.model_validate(row) if row is not None else None

    def create(self, perfume: PerfumeCreate) -> PerfumeRecord:
        """Insert a new perfume.

        The store assigns ``id`` and sets ``created_at`` and ``updated_at`` to
        the same instant. New rows always start available; a submitted
        ``is_available`` is ignored here.

        Args:
            perfume: Validated payload

        Returns:
            The persisted row
        """
        now = datetime.now(timezone.utc)
        values = _column_values(perfume)
        values["is_available"] = True
        db_perfume = Perfume(**values, created_at=now, updated_at=now)
        with self._store_errors("create perfume"):
            self._session.add(db_perfume)
            self._session.commit()
            self._session.refresh(db_perfume)
            return PerfumeRecord.model_validate(db_perfume)

    def update(self, perfume_id: int, perfume: PerfumeCreate) -> int:
        """Overwrite every mutable column of a perfume and bump ``updated_at``.

        This is a full replace: fields left at their defaults in ``perfume``
        overwrite whatever was stored before. Existence is not checked here.

        Args:
            perfume_id: Database identifier
            perfume: Validated payload

        Returns:
            Number of rows changed (0 or 1)
        """
        stmt = (
            update(Perfume)
            .where(Perfume.id == perfume_id)
            .values(**_column_values(perfume), updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        with self._store_errors(f"update perfume {perfume_id}"):
            result = self._session.execute(stmt)
            self._session.commit()
            return result.rowcount

    def soft_delete(self, perfume_id: int) -> int:
        """Mark a perfume unavailable. Already-unavailable rows report 0 changes."""
        stmt = (
            update(Perfume)
            .where(Perfume.id == perfume_id, Perfume.is_available.is_(True))
            .values(is_available=False)
            .execution_options(synchronize_session=False)
        )
        with self._store_errors(f"delete perfume {perfume_id}"):
            result = self._session.execute(stmt)
            self._session.commit()
            return result.rowcount

    def search(self, term: str | None) -> list[PerfumeRecord]:
        """Case-insensitive substring search over name, brand, description and category.

        An empty or missing term behaves like list_active().
        """
        if term is None or not term.strip():
            return self.list_active()

        pattern = f"%{_escape_like(term)}%"
        condition = or_(*(column.ilike(pattern, escape="\\") for column in SEARCHABLE_COLUMNS))
        with self._store_errors("search perfumes"):
            rows = self._active().filter(condition).all()
            return [PerfumeRecord.model_validate(row) for row in rows]
