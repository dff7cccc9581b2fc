"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Wildwatch ORM models."""
    pass


def utcnow() -> datetime:
    """Column default for created_at / updated_at timestamps."""
    return datetime.now(timezone.utc)
