"""Field Observation Schemas — body of POST /field-observations.

Invariants:
    - user_id is never read from the body; it comes from the verified token
    - location is required and bounded to valid WGS84 coordinates
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from wildwatch.core.domain_types import Season, SurveyType, WindLevel
from wildwatch.schemas.common import Location, SightingCreate


class FieldObservationCreate(BaseModel):
    id: UUID | None = None
    type: SurveyType
    time: datetime
    location: Location
    weather: str | None = Field(None, max_length=100)
    temperature: int | None = None
    wind: WindLevel | None = None
    season: Season | None = None
    consent: bool = False
    sightings: list[SightingCreate] = Field(default_factory=list)
