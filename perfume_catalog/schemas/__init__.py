"""Public schema exports."""

from .image import StoredImage, StoredImageInfo
from .perfume import (
    Category,
    Gender,
    PerfumeCreate,
    PerfumeRecord,
    ValidationIssue,
)

__all__ = [
    "Category",
    "Gender",
    "PerfumeCreate",
    "PerfumeRecord",
    "StoredImage",
    "StoredImageInfo",
    "ValidationIssue",
]
