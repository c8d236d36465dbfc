from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.constants import CHECKOUT_NOTE_PREFIX
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedInError, AlreadyCheckedOutError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, MonthlySummary
from .repository import AttendanceRepository

_SELECT = """
    SELECT
        a.id, a.employee_id, a.location_id, a.work_date,
        a.check_in_time, a.check_in_latitude, a.check_in_longitude, a.check_in_distance,
        a.check_out_time, a.check_out_latitude, a.check_out_longitude, a.check_out_distance,
        a.status, a.notes,
        l.name AS office_name, l.address AS office_address,
        l.latitude AS office_latitude, l.longitude AS office_longitude, l.radius AS office_radius
    FROM attendances a
    LEFT JOIN office_locations l ON l.id = a.location_id
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        location_id=r.get("location_id"),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_in_latitude=as_float(r["check_in_latitude"]),
        check_in_longitude=as_float(r["check_in_longitude"]),
        check_in_distance=as_float(r["check_in_distance"]),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        check_out_time=r.get("check_out_time"),
        check_out_latitude=as_float(r.get("check_out_latitude")),
        check_out_longitude=as_float(r.get("check_out_longitude")),
        check_out_distance=as_float(r.get("check_out_distance")),
        office_name=r.get("office_name"),
        office_address=r.get("office_address"),
        office_latitude=as_float(r.get("office_latitude")),
        office_longitude=as_float(r.get("office_longitude")),
        office_radius=int(r["office_radius"]) if r.get("office_radius") is not None else None,
    )


def _get_by_id(cur, record_id: int) -> Optional[AttendanceRecord]:
    cur.execute(_SELECT + " WHERE a.id=%s LIMIT 1", (record_id,))
    row = fetchone(cur)
    return _to_record(row) if row else None


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_day(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s AND a.work_date=%s LIMIT 1",
                (employee_id, work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            # uq_attendance_employee_day rejects the second insert for a day
            try:
                cur.execute(
                    """
                    INSERT INTO attendances(
                        employee_id, location_id, work_date, check_in_time,
                        check_in_latitude, check_in_longitude, check_in_distance, status, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee_id,
                        location_id,
                        check_in_time.date(),
                        check_in_time,
                        latitude,
                        longitude,
                        distance,
                        status.value,
                        notes,
                    ),
                )
            except IntegrityError as e:
                if is_duplicate_key(e):
                    raise AlreadyCheckedInError("You have already checked in today")
                raise
            return _get_by_id(cur, int(cur.lastrowid))

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
        extra_notes = f"{CHECKOUT_NOTE_PREFIX}{notes}" if notes else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendances
                SET check_out_time=%s,
                    check_out_latitude=%s,
                    check_out_longitude=%s,
                    check_out_distance=%s,
                    notes=NULLIF(CONCAT(COALESCE(notes, ''), %s), '')
                WHERE id=%s AND check_out_time IS NULL
                """,
                (check_out_time, latitude, longitude, distance, extra_notes, record_id),
            )
            updated = cur.rowcount > 0
            record = _get_by_id(cur, record_id)

        if record is None:
            raise NotFoundError("Attendance record not found")
        if not updated:
            raise AlreadyCheckedOutError("You have already checked out today")
        return record

    def history(self, employee_id: int, *, limit: int, offset: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s ORDER BY a.check_in_time DESC LIMIT %s OFFSET %s",
                (employee_id, int(limit), int(offset)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendances WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def monthly_summary(self, employee_id: int, *, year: int, month: int) -> MonthlySummary:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(*) AS total_days,
                    COALESCE(SUM(status = 'present'), 0) AS present_count,
                    COALESCE(SUM(status = 'late'), 0) AS late_count,
                    COALESCE(SUM(status = 'absent'), 0) AS absent_count,
                    COALESCE(SUM(status = 'permission'), 0) AS permission_count
                FROM attendances
                WHERE employee_id=%s
                  AND YEAR(check_in_time)=%s
                  AND MONTH(check_in_time)=%s
                """,
                (employee_id, int(year), int(month)),
            )
            row = fetchone(cur) or {}
            return MonthlySummary(
                year=int(year),
                month=int(month),
                total_days=int(row.get("total_days") or 0),
                present=int(row.get("present_count") or 0),
                late=int(row.get("late_count") or 0),
                absent=int(row.get("absent_count") or 0),
                permission=int(row.get("permission_count") or 0),
            )
