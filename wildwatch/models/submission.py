"""Submission ORM — citizen-science survey submissions and their sightings."""

import uuid
import datetime as dt

from sqlalchemy import String, Text, Integer, Boolean, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wildwatch.db.base import Base, utcnow
from wildwatch.models.sighting import SightingColumns


class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str | None] = mapped_column(String(8), nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    weather: Mapped[str | None] = mapped_column(String(100), nullable=True)
    temperature: Mapped[int | None] = mapped_column(Integer, nullable=True)
    wind: Mapped[str | None] = mapped_column(String(20), nullable=True)
    season: Mapped[str | None] = mapped_column(String(20), nullable=True)
    consent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )


class SubmissionSighting(SightingColumns, Base):
    __tablename__ = "submission_sightings"

    submission_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("submissions.id"), nullable=False, index=True,
    )
