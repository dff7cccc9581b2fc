"""Shared schema pieces — geographic point and sighting payloads."""

from pydantic import BaseModel, Field


class Location(BaseModel):
    """WGS84 point."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SightingCreate(BaseModel):
    """Sighting payload — standalone or nested under its parent record."""
    group_name: str = Field(min_length=1, max_length=255)
    estimated_count: int = Field(ge=0)
    behavior: str | None = Field(None, max_length=255)
    location_seen: str | None = Field(None, max_length=255)
    notes: str | None = None
    photo_url: str | None = Field(None, max_length=1024)
