"""Sighting columns — shared by field-observation and submission sightings.

Invariants:
    - estimated_count is nonnegative (enforced at the schema boundary)
    - Each concrete table adds its own parent foreign key
"""

from datetime import datetime

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from wildwatch.db.base import utcnow


class SightingColumns:
    """Mixin: one animal-group encounter recorded under a parent record."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    group_name: Mapped[str] = mapped_column(String(255), nullable=False)
    estimated_count: Mapped[int] = mapped_column(Integer, nullable=False)
    behavior: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location_seen: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
