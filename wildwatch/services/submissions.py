"""Submissions — citizen-science survey forms, with sightings."""

from wildwatch.models.submission import Submission, SubmissionSighting
from wildwatch.schemas.submission import SubmissionCreate
from wildwatch.services.survey_records import SurveyRecordKind


def serialize_submission(submission: Submission) -> dict:
    return {
        "id": submission.id,
        "user_id": submission.user_id,
        "type": submission.type,
        "date": submission.date,
        "time": submission.time,
        "location": submission.location,
        "weather": submission.weather,
        "temperature": submission.temperature,
        "wind": submission.wind,
        "season": submission.season,
        "consent": submission.consent,
        "created_at": submission.created_at,
    }


def submission_values(data: SubmissionCreate) -> dict:
    values = data.model_dump(exclude={"sightings"}, mode="json")
    values["date"] = data.date
    return values


SUBMISSIONS = SurveyRecordKind(
    label="Submission",
    parent=Submission,
    sighting=SubmissionSighting,
    parent_key="submission_id",
    sort_columns={
        "created_at": Submission.created_at,
        "date": Submission.date,
    },
    default_sort="created_at",
    serialize=serialize_submission,
)
