"""Field Observations — survey visits recorded in the field, with sightings."""

from wildwatch.models.field_observation import FieldObservation, FieldObservationSighting
from wildwatch.schemas.field_observation import FieldObservationCreate
from wildwatch.services.survey_records import SurveyRecordKind


def serialize_field_observation(observation: FieldObservation) -> dict:
    return {
        "id": observation.id,
        "user_id": observation.user_id,
        "type": observation.type,
        "time": observation.time,
        "location": {
            "latitude": observation.latitude,
            "longitude": observation.longitude,
        },
        "weather": observation.weather,
        "temperature": observation.temperature,
        "wind": observation.wind,
        "season": observation.season,
        "consent": observation.consent,
        "created_at": observation.created_at,
    }


def field_observation_values(data: FieldObservationCreate) -> dict:
    """Column values for a new observation row (sightings excluded)."""
    values = data.model_dump(exclude={"id", "location", "sightings"}, mode="json")
    values["time"] = data.time
    values["latitude"] = data.location.latitude
    values["longitude"] = data.location.longitude
    if data.id is not None:
        values["id"] = data.id
    return values


FIELD_OBSERVATIONS = SurveyRecordKind(
    label="Field observation",
    parent=FieldObservation,
    sighting=FieldObservationSighting,
    parent_key="field_observation_id",
    sort_columns={
        "created_at": FieldObservation.created_at,
        "time": FieldObservation.time,
    },
    default_sort="created_at",
    serialize=serialize_field_observation,
)
