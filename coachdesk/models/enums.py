"""
Shared enumerations.

Values are stored as plain strings; the enums are ``str`` subclasses so
a column value compares equal to its member.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    TRAINER = "trainer"
    ATHLETE = "athlete"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        """Return the matching role, or ``None`` for empty/unknown values."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class QuestionType(str, Enum):
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    NUMBER = "number"
    SCALE = "scale"


class QuestionnaireStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class WorkoutStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"


class RosterStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
