"""Exception taxonomy shared by the catalog and image services."""
from __future__ import annotations

from typing import Sequence

from perfume_catalog.schemas.perfume import ValidationIssue


class CatalogError(Exception):
    """Base class for expected failures that map to a client-facing status code."""

    status_code: int = 400
    error: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.error)
        self.message = message


class PerfumeValidationError(CatalogError):
    """Payload violated one or more field constraints."""

    status_code = 400
    error = "Validation failed"

    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(f"{len(issues)} field(s) failed validation")
        self.issues = list(issues)


class InvalidIdentifier(CatalogError):
    status_code = 400
    error = "Invalid perfume ID"


class PerfumeNotFound(CatalogError):
    status_code = 404
    error = "Perfume not found"

    def __init__(self, perfume_id: int) -> None:
        super().__init__(f"Perfume with ID {perfume_id} not found")
        self.perfume_id = perfume_id


class StoreError(Exception):
    """Opaque storage failure. The original driver message is kept for logs."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnsupportedImageType(CatalogError):
    error = "Unsupported file type"


class ImageTooLarge(CatalogError):
    error = "File is too large"


class TooManyImages(CatalogError):
    error = "Too many files"


class MissingImage(CatalogError):
    error = "No file was uploaded"


class InvalidImageName(CatalogError):
    error = "Invalid file name"


class ImageNotFound(CatalogError):
    status_code = 404
    error = "File not found"
