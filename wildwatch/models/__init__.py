"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from wildwatch.models.device import (  # noqa: F401
    Device, DeviceOwner, DeviceType, DeviceTypeSensor, Sensor, SensorType,
)
from wildwatch.models.event import (  # noqa: F401
    Event, EventMedia, Region, RegionLabel, SensorData,
)
from wildwatch.models.project import Project, ProjectDevice  # noqa: F401
from wildwatch.models.field_observation import (  # noqa: F401
    FieldObservation, FieldObservationSighting,
)
from wildwatch.models.submission import Submission, SubmissionSighting  # noqa: F401
