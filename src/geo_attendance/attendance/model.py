from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import WorkDuration, format_timestamp
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    Open while `check_out_time` is None, closed afterwards. The office_* fields
    are read through the location join; the distances are the values computed
    when each event happened.
    """

    id: int
    employee_id: int
    location_id: Optional[int]
    work_date: date
    check_in_time: datetime
    check_in_latitude: float
    check_in_longitude: float
    check_in_distance: float
    status: AttendanceStatus
    notes: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_latitude: Optional[float] = None
    check_out_longitude: Optional[float] = None
    check_out_distance: Optional[float] = None
    office_name: Optional[str] = None
    office_address: Optional[str] = None
    office_latitude: Optional[float] = None
    office_longitude: Optional[float] = None
    office_radius: Optional[int] = None

    @property
    def is_closed(self) -> bool:
        return self.check_out_time is not None

    @property
    def work_duration(self) -> Optional[WorkDuration]:
        if self.check_out_time is None:
            return None
        return WorkDuration.between(self.check_in_time, self.check_out_time)

    def to_dict(self) -> dict:
        duration = self.work_duration
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "location_id": self.location_id,
            "work_date": self.work_date.isoformat(),
            "check_in_time": format_timestamp(self.check_in_time),
            "check_in_latitude": self.check_in_latitude,
            "check_in_longitude": self.check_in_longitude,
            "check_in_distance": self.check_in_distance,
            "check_out_time": format_timestamp(self.check_out_time),
            "check_out_latitude": self.check_out_latitude,
            "check_out_longitude": self.check_out_longitude,
            "check_out_distance": self.check_out_distance,
            "status": self.status.value,
            "notes": self.notes,
            "office_name": self.office_name,
            "office_address": self.office_address,
            "work_duration_minutes": duration.minutes if duration else None,
        }


@dataclass(frozen=True)
class MonthlySummary:
    """Read-model: per-status counts for one employee and calendar month."""

    year: int
    month: int
    total_days: int = 0
    present: int = 0
    late: int = 0
    absent: int = 0
    permission: int = 0

    @property
    def attendance_rate(self) -> str:
        if self.total_days == 0:
            return "0%"
        return f"{self.present / self.total_days * 100:.2f}%"

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "total_days": self.total_days,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "permission": self.permission,
            "attendance_rate": self.attendance_rate,
        }
