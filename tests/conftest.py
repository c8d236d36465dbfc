from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

import pytest
from werkzeug.security import generate_password_hash

from geo_attendance.attendance.model import AttendanceRecord, MonthlySummary
from geo_attendance.container import build_services
from geo_attendance.core.constants import CHECKOUT_NOTE_PREFIX
from geo_attendance.core.enums import AttendanceStatus, RecordStatus
from geo_attendance.core.exceptions import AlreadyCheckedInError, AlreadyCheckedOutError, NotFoundError
from geo_attendance.employees.model import CurrentEmployee, Employee
from geo_attendance.locations.model import OfficeLocation
from geo_attendance.main import create_app

TEST_JWT_SECRET = "test-jwt-secret"
PASSWORD = "password123"

HQ_LAT = -6.2
HQ_LNG = 106.8


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._by_id = {e.id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_active_by_nip(self, nip: str) -> Optional[Employee]:
        for e in self._by_id.values():
            if e.nip == nip and e.is_active:
                return e
        return None


class InMemoryLocations:
    def __init__(self, locations: list[OfficeLocation]):
        self._by_id = {loc.id: loc for loc in locations}

    def get_active_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        loc = self._by_id.get(location_id)
        return loc if loc and loc.status == RecordStatus.ACTIVE else None

    def get_first_active(self) -> Optional[OfficeLocation]:
        active = [loc for loc in self._by_id.values() if loc.status == RecordStatus.ACTIVE]
        return min(active, key=lambda loc: loc.id) if active else None

    def list_active(self):
        active = [loc for loc in self._by_id.values() if loc.status == RecordStatus.ACTIVE]
        return sorted(active, key=lambda loc: loc.name)


class InMemoryAttendance:
    """Ledger keyed by (employee, day); the lock plays the role of the unique key."""

    def __init__(self, locations: InMemoryLocations):
        self._locations = locations
        self._by_employee_day: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()
        # Called after every lookup; tests use it to line threads up.
        self.after_lookup: Optional[Callable[[], None]] = None

    def find_for_day(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rec = self._by_employee_day.get((employee_id, work_date))
        if self.after_lookup:
            self.after_lookup()
        return rec

    def create(self, *, employee_id, location_id, check_in_time: datetime, latitude, longitude, distance, status, notes=None):
        key = (employee_id, check_in_time.date())
        with self._lock:
            if key in self._by_employee_day:
                raise AlreadyCheckedInError("You have already checked in today")
            self._id += 1
            office = self._locations.get_active_by_id(location_id)
            rec = AttendanceRecord(
                id=self._id,
                employee_id=employee_id,
                location_id=location_id,
                work_date=check_in_time.date(),
                check_in_time=check_in_time,
                check_in_latitude=latitude,
                check_in_longitude=longitude,
                check_in_distance=distance,
                status=status,
                notes=notes,
                office_name=office.name if office else None,
                office_address=office.address if office else None,
                office_latitude=office.latitude if office else None,
                office_longitude=office.longitude if office else None,
                office_radius=office.radius if office else None,
            )
            self._by_employee_day[key] = rec
            return rec

    def complete(self, *, record_id, check_out_time, latitude, longitude, distance, notes=None):
        with self._lock:
            for key, rec in self._by_employee_day.items():
                if rec.id != record_id:
                    continue
                if rec.is_closed:
                    raise AlreadyCheckedOutError("You have already checked out today")
                merged = (rec.notes or "") + (f"{CHECKOUT_NOTE_PREFIX}{notes}" if notes else "")
                updated = replace(
                    rec,
                    check_out_time=check_out_time,
                    check_out_latitude=latitude,
                    check_out_longitude=longitude,
                    check_out_distance=distance,
                    notes=merged or None,
                )
                self._by_employee_day[key] = updated
                return updated
        raise NotFoundError("Attendance record not found")

    def history(self, employee_id: int, *, limit: int, offset: int):
        items = [r for r in self._by_employee_day.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items[offset : offset + limit]

    def count(self, employee_id: int) -> int:
        return sum(1 for r in self._by_employee_day.values() if r.employee_id == employee_id)

    def monthly_summary(self, employee_id: int, *, year: int, month: int) -> MonthlySummary:
        items = [
            r
            for r in self._by_employee_day.values()
            if r.employee_id == employee_id and r.check_in_time.year == year and r.check_in_time.month == month
        ]
        by_status = {s: sum(1 for r in items if r.status == s) for s in AttendanceStatus}
        return MonthlySummary(
            year=year,
            month=month,
            total_days=len(items),
            present=by_status[AttendanceStatus.PRESENT],
            late=by_status[AttendanceStatus.LATE],
            absent=by_status[AttendanceStatus.ABSENT],
            permission=by_status[AttendanceStatus.PERMISSION],
        )


def make_employee(employee_id: int, nip: str, name: str, *, status: RecordStatus = RecordStatus.ACTIVE) -> Employee:
    return Employee(
        id=employee_id,
        nip=nip,
        name=name,
        password_hash=generate_password_hash(PASSWORD),
        email=f"{nip.lower()}@company.com",
        position="Staff",
        status=status,
    )


@pytest.fixture
def hq() -> OfficeLocation:
    return OfficeLocation(id=1, name="Kantor Pusat", latitude=HQ_LAT, longitude=HQ_LNG, radius=100, address="Jakarta")


@pytest.fixture
def branch() -> OfficeLocation:
    return OfficeLocation(id=2, name="Kantor Cabang Bandung", latitude=-6.9175, longitude=107.6191, radius=150, address="Bandung")


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            make_employee(1, "EMP001", "Budi Santoso"),
            make_employee(2, "EMP002", "Siti Aminah"),
            make_employee(3, "EMP003", "Former Staff", status=RecordStatus.INACTIVE),
        ]
    )


@pytest.fixture
def locations_repo(hq, branch) -> InMemoryLocations:
    return InMemoryLocations([hq, branch])


@pytest.fixture
def attendance_repo(locations_repo) -> InMemoryAttendance:
    return InMemoryAttendance(locations_repo)


@pytest.fixture
def container(employees_repo, locations_repo, attendance_repo):
    return build_services(
        employees_repo=employees_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        jwt_secret=TEST_JWT_SECRET,
    )


@pytest.fixture
def service(container):
    return container.attendance_service


@pytest.fixture
def current(employees_repo) -> CurrentEmployee:
    return CurrentEmployee.from_employee(employees_repo.get_by_id(1))


@pytest.fixture
def app(container):
    return create_app(container, settings_module="geo_attendance.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client) -> dict:
    resp = client.post("/api/auth/login", json={"nip": "EMP001", "password": PASSWORD})
    token = resp.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def container_factory(employees_repo, locations_repo):
    """Build a container with different offices or options than the default one."""

    def _build(*, locations: Optional[list[OfficeLocation]] = None, **options):
        repo = InMemoryLocations(locations) if locations is not None else locations_repo
        return build_services(
            employees_repo=employees_repo,
            locations_repo=repo,
            attendance_repo=InMemoryAttendance(repo),
            jwt_secret=TEST_JWT_SECRET,
            **options,
        )

    return _build
