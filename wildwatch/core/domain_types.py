"""Domain Types — value types shared by the API, services and core logic.

Invariants:
    - AuthenticatedUser is only constructed from a fully verified token
    - All enumerated states encoded as str Enums — no raw string matching
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified bearer token."""
    sub: str
    email: str | None = None
    role: str | None = None
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SurveyType(str, Enum):
    """Field protocol used for an observation or submission."""
    TRANSECT = "transect"
    FIT = "fit"


class WindLevel(str, Enum):
    CALM = "calm"
    LIGHT = "light"
    MODERATE = "moderate"
    STRONG = "strong"


class Season(str, Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"
