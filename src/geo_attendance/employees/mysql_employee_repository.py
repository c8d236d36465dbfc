from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, nip, name, email, password, phone, position, status, created_at"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        id=int(row["id"]),
        nip=row["nip"],
        name=row["name"],
        password_hash=row["password"],
        email=row.get("email"),
        phone=row.get("phone"),
        position=row.get("position") or "Staff",
        status=RecordStatus(row.get("status") or RecordStatus.ACTIVE.value),
        created_at=row.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s LIMIT 1", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_active_by_nip(self, nip: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE nip=%s AND status='active' LIMIT 1",
                (nip,),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None
