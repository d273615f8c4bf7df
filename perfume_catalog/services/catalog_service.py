"""Catalog service: validation + repository composed into the CRUD/search contract."""
from __future__ import annotations

import logging
from typing import Any

from perfume_catalog.schemas.perfume import PerfumeRecord
from perfume_catalog.services.errors import InvalidIdentifier, PerfumeNotFound
from perfume_catalog.services.perfume_repository import PerfumeRepository
from perfume_catalog.services.perfume_validator import validate_perfume

logger = logging.getLogger(__name__)

# Largest value a signed BIGINT primary key can hold.
MAX_PERFUME_ID = 2**63 - 1


def parse_perfume_id(raw_id: Any) -> int:
    """Parse a path identifier into a positive integer.

    Raises:
        InvalidIdentifier: If the value is not a positive decimal integer in range
    """
    if isinstance(raw_id, bool):
        raise InvalidIdentifier(f"'{raw_id}' is not a valid perfume ID")
    if isinstance(raw_id, int):
        perfume_id = raw_id
    else:
        text = str(raw_id).strip() if raw_id is not None else ""
        if not text.isdigit() or not text.isascii():
            raise InvalidIdentifier(f"'{raw_id}' is not a valid perfume ID")
        perfume_id = int(text)

    if perfume_id < 1 or perfume_id > MAX_PERFUME_ID:
        raise InvalidIdentifier(f"Perfume ID must be between 1 and {MAX_PERFUME_ID}")
    return perfume_id


class CatalogService:
    """Orchestrates identify -> existence check -> validate + execute for each request."""

    def __init__(self, repository: PerfumeRepository) -> None:
        self._repository = repository

    def list_perfumes(self, search: str | None = None) -> list[PerfumeRecord]:
        if search:
            return self._repository.search(search)
        return self._repository.list_active()

    def get_perfume(self, raw_id: Any) -> PerfumeRecord:
        perfume_id = parse_perfume_id(raw_id)
        perfume = self._repository.get_active(perfume_id)
        if perfume is None:
            raise PerfumeNotFound(perfume_id)
        return perfume

    def create_perfume(self, payload: Any) -> PerfumeRecord:
        perfume = validate_perfume(payload)
        created = self._repository.create(perfume)
        logger.info(f"Created perfume {created.id} ({created.brand} - {created.name})")
        return created

    def update_perfume(self, raw_id: Any, payload: Any) -> PerfumeRecord:
        """
        Replace every field of an active perfume.

        Omitted optional fields are reset to their schema defaults; prior values
        are not merged in.

        Raises:
            InvalidIdentifier: Malformed ID
            PerfumeNotFound: No active perfume with that ID, before or during the write
            PerfumeValidationError: Payload failed validation
        """
        perfume_id = parse_perfume_id(raw_id)
        if self._repository.get_active(perfume_id) is None:
            raise PerfumeNotFound(perfume_id)

        perfume = validate_perfume(payload)
        if self._repository.update(perfume_id, perfume) == 0:
            raise PerfumeNotFound(perfume_id)

        # is_available may have just been set to false, so read past the filter
        updated = self._repository.get_any(perfume_id)
        if updated is None:
            raise PerfumeNotFound(perfume_id)
        logger.info(f"Updated perfume {perfume_id}")
        return updated

    def delete_perfume(self, raw_id: Any) -> None:
        perfume_id = parse_perfume_id(raw_id)
        if self._repository.get_active(perfume_id) is None:
            raise PerfumeNotFound(perfume_id)

        if self._repository.soft_delete(perfume_id) == 0:
            raise PerfumeNotFound(perfume_id)
        logger.info(f"Soft-deleted perfume {perfume_id}")
