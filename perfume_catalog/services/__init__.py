"""Services module for business logic."""
from __future__ import annotations

from .catalog_service import CatalogService, parse_perfume_id
from .image_store import ImageStore
from .perfume_repository import PerfumeRepository
from .perfume_validator import validate_perfume

__all__ = [
    "CatalogService",
    "ImageStore",
    "PerfumeRepository",
    "parse_perfume_id",
    "validate_perfume",
]
