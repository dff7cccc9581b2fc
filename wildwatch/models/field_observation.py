"""Field Observation ORM — a user's survey visit with its sightings.

Invariants:
    - id is a UUID generated client-side or by default
    - user_id is the authenticated subject that created the row
    - latitude/longitude are required (observations are always geolocated)
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Integer, Float, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wildwatch.db.base import Base, utcnow
from wildwatch.models.sighting import SightingColumns


class FieldObservation(Base):
    __tablename__ = "field_observations"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    weather: Mapped[str | None] = mapped_column(String(100), nullable=True)
    temperature: Mapped[int | None] = mapped_column(Integer, nullable=True)
    wind: Mapped[str | None] = mapped_column(String(20), nullable=True)
    season: Mapped[str | None] = mapped_column(String(20), nullable=True)
    consent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )


class FieldObservationSighting(SightingColumns, Base):
    __tablename__ = "field_observation_sightings"

    field_observation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("field_observations.id"), nullable=False, index=True,
    )
