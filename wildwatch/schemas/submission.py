"""Submission Schemas — body of POST /submissions."""

import datetime as dt

from pydantic import BaseModel, Field

from wildwatch.core.domain_types import SurveyType
from wildwatch.schemas.common import SightingCreate


class SubmissionCreate(BaseModel):
    type: SurveyType
    date: dt.date
    time: str | None = Field(None, pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    location: str | None = None
    weather: str | None = Field(None, max_length=100)
    temperature: int | None = None
    wind: str | None = Field(None, max_length=20)
    season: str | None = Field(None, max_length=20)
    consent: bool = False
    sightings: list[SightingCreate] = Field(default_factory=list)
