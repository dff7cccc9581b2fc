"""Submission Routes — /submissions."""

from wildwatch.api.routes.survey_routes import build_survey_router
from wildwatch.schemas.submission import SubmissionCreate
from wildwatch.services.submissions import SUBMISSIONS, submission_values

router = build_survey_router(
    "/submissions", SUBMISSIONS, SubmissionCreate, submission_values,
)
