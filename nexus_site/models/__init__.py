"""SQLAlchemy ORM models."""

from nexus_site.models.base import Base
from nexus_site.models.inquiry import Inquiry

__all__ = [
    "Base",
    "Inquiry",
]
