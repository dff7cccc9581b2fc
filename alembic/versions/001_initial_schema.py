"""Initial schema — devices, events, projects, field observations, submissions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _sighting_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("group_name", sa.String(255), nullable=False),
        sa.Column("estimated_count", sa.Integer, nullable=False),
        sa.Column("behavior", sa.String(255), nullable=True),
        sa.Column("location_seen", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("photo_url", sa.String(1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "device_types",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.create_table(
        "sensor_types",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.create_table(
        "sensors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("model", sa.String(255), nullable=True),
        sa.Column("type_id", sa.Integer, sa.ForeignKey("sensor_types.id"), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "device_type_sensors",
        sa.Column("device_type_id", sa.Integer, sa.ForeignKey("device_types.id"), primary_key=True),
        sa.Column("sensor_id", sa.Integer, sa.ForeignKey("sensors.id"), primary_key=True),
    )
    op.create_table(
        "devices",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("type_id", sa.Integer, sa.ForeignKey("device_types.id"), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("serial", sa.String(64), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(64), nullable=False),
        sa.Column("updated_by", sa.String(64), nullable=True),
        sa.Column("ip", sa.String(64), nullable=True),
        sa.Column("last_seen", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "device_owners",
        sa.Column("device_id", sa.Integer, sa.ForeignKey("devices.id"), primary_key=True),
        sa.Column("user_id", sa.String(64), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("device_id", sa.Integer, sa.ForeignKey("devices.id"), nullable=False),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("verified_by", sa.String(64), nullable=True),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.Column("updated_by", sa.String(64), nullable=True),
    )
    op.create_index("ix_events_time", "events", ["time"])
    op.create_index("ix_events_device_id", "events", ["device_id"])
    op.create_table(
        "regions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id"), nullable=False),
        sa.Column("w", sa.Float, nullable=True),
        sa.Column("h", sa.Float, nullable=True),
        sa.Column("x", sa.Float, nullable=True),
        sa.Column("y", sa.Float, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_regions_event_id", "regions", ["event_id"])
    op.create_table(
        "region_labels",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("region_id", sa.Integer, sa.ForeignKey("regions.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("latin_name", sa.String(255), nullable=True),
        sa.Column("count", sa.Integer, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_region_labels_region_id", "region_labels", ["region_id"])
    op.create_table(
        "sensor_data",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("sensor_id", sa.Integer, sa.ForeignKey("sensors.id"), nullable=True),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id"), nullable=False),
        sa.Column("value", sa.Float, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_sensor_data_event_id", "sensor_data", ["event_id"])
    op.create_table(
        "event_media",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id"), nullable=False),
        sa.Column("file_id", sa.String(255), nullable=False),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_event_media_event_id", "event_media", ["event_id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("short_description", sa.String(255), nullable=True),
        sa.Column("long_description", sa.Text, nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "project_devices",
        sa.Column("project_id", sa.Integer, sa.ForeignKey("projects.id"), primary_key=True),
        sa.Column("device_id", sa.Integer, sa.ForeignKey("devices.id"), primary_key=True),
    )

    op.create_table(
        "field_observations",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("weather", sa.String(100), nullable=True),
        sa.Column("temperature", sa.Integer, nullable=True),
        sa.Column("wind", sa.String(20), nullable=True),
        sa.Column("season", sa.String(20), nullable=True),
        sa.Column("consent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_field_observations_user_id", "field_observations", ["user_id"])
    op.create_table(
        "field_observation_sightings",
        *_sighting_columns(),
        sa.Column("field_observation_id", sa.Uuid, sa.ForeignKey("field_observations.id"), nullable=False),
    )
    op.create_index(
        "ix_field_observation_sightings_field_observation_id",
        "field_observation_sightings", ["field_observation_id"],
    )

    op.create_table(
        "submissions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("time", sa.String(8), nullable=True),
        sa.Column("location", sa.Text, nullable=True),
        sa.Column("weather", sa.String(100), nullable=True),
        sa.Column("temperature", sa.Integer, nullable=True),
        sa.Column("wind", sa.String(20), nullable=True),
        sa.Column("season", sa.String(20), nullable=True),
        sa.Column("consent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_submissions_user_id", "submissions", ["user_id"])
    op.create_table(
        "submission_sightings",
        *_sighting_columns(),
        sa.Column("submission_id", sa.Uuid, sa.ForeignKey("submissions.id"), nullable=False),
    )
    op.create_index(
        "ix_submission_sightings_submission_id",
        "submission_sightings", ["submission_id"],
    )


def downgrade() -> None:
    for table in (
        "submission_sightings", "submissions",
        "field_observation_sightings", "field_observations",
        "project_devices", "projects",
        "event_media", "sensor_data", "region_labels", "regions", "events",
        "device_owners", "devices", "device_type_sensors", "sensors",
        "sensor_types", "device_types",
    ):
        op.drop_table(table)
