from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Optional

from ..common.datetime_utils import WorkDuration, format_timestamp, now_local
from ..common.geo import haversine_distance, is_within_radius, round_meters
from ..common.validators import clean_notes, parse_coordinates
from ..core.constants import DEFAULT_WORK_START
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NoCheckInError,
    OutOfRangeError,
    ValidationError,
)
from ..employees.model import CurrentEmployee
from ..locations.model import OfficeLocation
from ..locations.service import OfficeDirectory
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Geofenced check-in / check-out protocol and the employee's own attendance views.

    Every operation takes the authenticated `CurrentEmployee` explicitly. "Today"
    is the date of the clock that stamps the event: server-local, or the wall
    clock of `timezone` when one is configured.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        offices: OfficeDirectory,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        work_start: time = DEFAULT_WORK_START,
        timezone: str | None = None,
    ):
        self._attendance = attendance
        self._offices = offices
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._work_start = work_start
        self._timezone = timezone

    def now(self) -> datetime:
        return now_local(self._timezone)

    def check_in(
        self,
        current: CurrentEmployee,
        *,
        latitude: Any,
        longitude: Any,
        location_id: Any = None,
        notes: Any = None,
        now: datetime | None = None,
    ) -> dict:
        lat, lng = parse_coordinates(latitude, longitude, check_range=True)
        now = now or self.now()

        existing = self._attendance.find_for_day(current.id, now.date())
        if existing:
            raise self._already_checked_in(existing)

        office = self._offices.resolve(location_id)
        distance = haversine_distance(lat, lng, office.latitude, office.longitude)
        if not is_within_radius(distance, office.radius):
            logger.info(
                "Check-in rejected for employee %s: %sm from %s (radius %sm)",
                current.id,
                round_meters(distance),
                office.name,
                office.radius,
            )
            raise self._out_of_range(distance, office)

        strategy = self._factory.for_checkin(now=now, work_start=self._work_start)
        decision = strategy.decide_checkin(now=now, work_start=self._work_start)

        try:
            record = self._attendance.create(
                employee_id=current.id,
                location_id=office.id,
                check_in_time=now,
                latitude=lat,
                longitude=lng,
                distance=round(distance, 2),
                status=decision.status,
                notes=clean_notes(notes),
            )
        except AlreadyCheckedInError:
            # Lost the race against a concurrent check-in for the same day.
            existing = self._attendance.find_for_day(current.id, now.date())
            if existing:
                raise self._already_checked_in(existing)
            raise

        logger.info(
            "Check-in accepted: employee=%s record=%s status=%s distance=%sm",
            current.id,
            record.id,
            record.status.value,
            round_meters(distance),
        )
        return {
            "id": record.id,
            "employee_id": record.employee_id,
            "check_in_time": format_timestamp(record.check_in_time),
            "status": record.status.value,
            "distance": round_meters(distance),
            "office": office.summary(),
            "coordinates": {"latitude": lat, "longitude": lng},
        }

    def check_out(
        self,
        current: CurrentEmployee,
        *,
        latitude: Any,
        longitude: Any,
        notes: Any = None,
        now: datetime | None = None,
    ) -> dict:
        # No range check on check-out coordinates.
        lat, lng = parse_coordinates(latitude, longitude, check_range=False)
        now = now or self.now()

        record = self._attendance.find_for_day(current.id, now.date())
        if not record:
            raise NoCheckInError("No check-in record found for today. Please check-in first.")
        if record.is_closed:
            raise AlreadyCheckedOutError(
                "You have already checked out today",
                data={"check_out_time": format_timestamp(record.check_out_time)},
            )
        if now <= record.check_in_time:
            raise ValidationError("Check-out time must be later than check-in time")

        # Informational only, measured against the office stored on the record.
        distance: Optional[float] = None
        if record.office_latitude is not None and record.office_longitude is not None:
            distance = haversine_distance(lat, lng, record.office_latitude, record.office_longitude)

        updated = self._attendance.complete(
            record_id=record.id,
            check_out_time=now,
            latitude=lat,
            longitude=lng,
            distance=round(distance, 2) if distance is not None else None,
            notes=clean_notes(notes),
        )

        duration = WorkDuration.between(updated.check_in_time, updated.check_out_time)
        logger.info(
            "Check-out accepted: employee=%s record=%s worked=%s",
            current.id,
            updated.id,
            duration.formatted,
        )
        return {
            "id": updated.id,
            "check_in_time": format_timestamp(updated.check_in_time),
            "check_out_time": format_timestamp(updated.check_out_time),
            "work_duration": duration.to_dict(),
            "distance": round_meters(distance) if distance is not None else None,
            "office_name": record.office_name,
        }

    def get_today(self, current: CurrentEmployee, *, now: datetime | None = None) -> Optional[dict]:
        now = now or self.now()
        record = self._attendance.find_for_day(current.id, now.date())
        if not record:
            return None

        data = record.to_dict()
        duration = record.work_duration
        data["work_duration"] = duration.to_dict() if duration else None
        return data

    def get_history(self, current: CurrentEmployee, *, limit: int, offset: int) -> tuple[list[dict], dict]:
        if limit < 0 or offset < 0:
            raise ValidationError("limit and offset must be non-negative")

        records = self._attendance.history(current.id, limit=limit, offset=offset)
        total = self._attendance.count(current.id)
        pagination = {
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + limit < total,
        }
        return [r.to_dict() for r in records], pagination

    def get_monthly_summary(
        self,
        current: CurrentEmployee,
        *,
        year: int | None = None,
        month: int | None = None,
        now: datetime | None = None,
    ) -> dict:
        now = now or self.now()
        year = now.year if year is None else year
        month = now.month if month is None else month

        if not 1 <= month <= 12:
            raise ValidationError("Invalid month. Must be between 1-12")
        if not 1 <= year <= 9999:
            raise ValidationError("Invalid year")

        return self._attendance.monthly_summary(current.id, year=year, month=month).to_dict()

    @staticmethod
    def _already_checked_in(record: AttendanceRecord) -> AlreadyCheckedInError:
        return AlreadyCheckedInError(
            "You have already checked in today",
            data={
                "check_in_time": format_timestamp(record.check_in_time),
                "status": record.status.value,
                "office_name": record.office_name,
            },
        )

    @staticmethod
    def _out_of_range(distance: float, office: OfficeLocation) -> OutOfRangeError:
        meters = round_meters(distance)
        return OutOfRangeError(
            "You are too far from the office",
            data={
                "your_distance": meters,
                "required_radius": office.radius,
                "distance_difference": meters - office.radius,
                "office": {
                    "id": office.id,
                    "name": office.name,
                    "address": office.address,
                    "coordinates": {"latitude": office.latitude, "longitude": office.longitude},
                },
                "message_detail": (
                    f"You must be within {office.radius} meters. You are {meters} meters away."
                ),
            },
        )
