"""ORM models exposed for external modules."""
from .base import Base
from .perfume import Perfume

__all__ = [
    "Base",
    "Perfume",
]
