from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Classification stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    PERMISSION = "permission"


class RecordStatus(str, Enum):
    """Active flag used by employees and office locations."""

    ACTIVE = "active"
    INACTIVE = "inactive"
