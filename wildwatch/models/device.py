"""Device ORM — trap devices, their owners, and the sensor catalogue behind them.

Invariants:
    - A device's sensors are the sensors linked to its device type (device_type_sensors)
    - device_owners holds one row per (device, user); created_by names the creator
    - Timestamps are timezone-aware UTC
"""

from datetime import datetime

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from wildwatch.db.base import Base, utcnow


class DeviceType(Base):
    __tablename__ = "device_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)


class SensorType(Base):
    __tablename__ = "sensor_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)


class Sensor(Base):
    __tablename__ = "sensors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type_id: Mapped[int] = mapped_column(
        ForeignKey("sensor_types.id"), nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )


class DeviceTypeSensor(Base):
    """Link table: which sensors a device type carries."""
    __tablename__ = "device_type_sensors"

    device_type_id: Mapped[int] = mapped_column(
        ForeignKey("device_types.id"), primary_key=True,
    )
    sensor_id: Mapped[int] = mapped_column(
        ForeignKey("sensors.id"), primary_key=True,
    )


class Device(Base):
    __tablename__ = "devices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type_id: Mapped[int | None] = mapped_column(
        ForeignKey("device_types.id"), nullable=True,
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    serial: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_seen: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )


class DeviceOwner(Base):
    """Owner-link: associates a user with a device they created or were given."""
    __tablename__ = "device_owners"

    device_id: Mapped[int] = mapped_column(
        ForeignKey("devices.id"), primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
