"""Project Schemas — create (full) and update (partial) bodies.

Invariants:
    - ProjectUpdate leaves omitted fields alone (callers dump with exclude_unset)
    - title may be omitted from an update but never set to null
"""

from pydantic import BaseModel, Field, field_validator

from wildwatch.schemas.common import Location


class ProjectCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    short_description: str | None = Field(None, max_length=255)
    long_description: str | None = None
    location: Location | None = None


class ProjectUpdate(BaseModel):
    """Partial update — only fields present in the body are written."""
    title: str | None = Field(None, min_length=1, max_length=255)
    short_description: str | None = Field(None, max_length=255)
    long_description: str | None = None
    location: Location | None = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return v
