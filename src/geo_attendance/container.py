from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_HOURS, DEFAULT_WORK_START
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, IdentityVerifier
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import OfficeDirectory


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    locations_repo: LocationRepository
    attendance_repo: AttendanceRepository

    identity_verifier: IdentityVerifier
    auth_service: AuthService
    office_directory: OfficeDirectory
    attendance_service: AttendanceService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    locations_repo: LocationRepository,
    attendance_repo: AttendanceRepository,
    jwt_secret: str,
    jwt_expires_hours: int = DEFAULT_TOKEN_HOURS,
    work_start: time = DEFAULT_WORK_START,
    default_location_id: Optional[int] = None,
    timezone: Optional[str] = None,
) -> Container:
    """Wire services on top of any repository implementations."""
    identity_verifier = IdentityVerifier(employees_repo, secret=jwt_secret, expires_hours=jwt_expires_hours)
    auth_service = AuthService(employees_repo, identity_verifier)
    office_directory = OfficeDirectory(locations_repo, default_location_id=default_location_id)
    attendance_service = AttendanceService(
        attendance_repo,
        office_directory,
        strategy_factory=AttendanceStrategyFactory(),
        work_start=work_start,
        timezone=timezone,
    )

    return Container(
        employees_repo=employees_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        identity_verifier=identity_verifier,
        auth_service=auth_service,
        office_directory=office_directory,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict, **options) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 10)),
        pool_timeout=float(db_config.get("pool_timeout", 10.0)),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        **options,
    )
