from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, MonthlySummary


class AttendanceRepository(Protocol):
    """Attendance ledger: the only writer of attendance records."""

    def find_for_day(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """Open or closed record whose check-in falls on `work_date`."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        location_id: int,
        check_in_time: datetime,
        latitude: float,
        longitude: float,
        distance: float,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Insert the day's record atomically.

        Raises AlreadyCheckedInError when the employee already has a record
        for `check_in_time.date()`, however many requests race for it.
        """

        raise NotImplementedError

    def complete(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        latitude: float,
        longitude: float,
        distance: Optional[float],
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Fill the check-out fields of an open record, appending `notes`.

        Raises NotFoundError for an unknown id and AlreadyCheckedOutError when
        the record is already closed.
        """

        raise NotImplementedError

    def history(self, employee_id: int, *, limit: int, offset: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count(self, employee_id: int) -> int:
        raise NotImplementedError

    def monthly_summary(self, employee_id: int, *, year: int, month: int) -> MonthlySummary:
        raise NotImplementedError
