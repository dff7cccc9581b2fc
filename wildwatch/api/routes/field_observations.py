"""Field Observation Routes — /field-observations."""

from wildwatch.api.routes.survey_routes import build_survey_router
from wildwatch.schemas.field_observation import FieldObservationCreate
from wildwatch.services.field_observations import (
    FIELD_OBSERVATIONS, field_observation_values,
)

router = build_survey_router(
    "/field-observations",
    FIELD_OBSERVATIONS,
    FieldObservationCreate,
    field_observation_values,
)
