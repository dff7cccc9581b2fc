"""Device Schemas — body of POST /my/device.

Invariants:
    - name is required and non-blank after stripping
    - serial defaults to a generated UUID in the service when omitted
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=255)
    type_id: int | None = Field(None, alias="typeId", ge=1)
    serial: str | None = Field(None, max_length=64)
    notes: str | None = None
    ip: str | None = Field(None, max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v
