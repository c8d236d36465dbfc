from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import OfficeLocation
from .repository import LocationRepository

_COLUMNS = "id, name, address, latitude, longitude, radius, status, created_at"


def _to_location(row: Dict[str, Any]) -> OfficeLocation:
    return OfficeLocation(
        id=int(row["id"]),
        name=row["name"],
        address=row.get("address"),
        latitude=as_float(row["latitude"]),
        longitude=as_float(row["longitude"]),
        radius=int(row["radius"]),
        status=RecordStatus(row.get("status") or RecordStatus.ACTIVE.value),
        created_at=row.get("created_at"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM office_locations WHERE id=%s AND status='active' LIMIT 1",
                (int(location_id),),
            )
            row = fetchone(cur)
            return _to_location(row) if row else None

    def get_first_active(self) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM office_locations WHERE status='active' ORDER BY id ASC LIMIT 1")
            row = fetchone(cur)
            return _to_location(row) if row else None

    def list_active(self) -> Sequence[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM office_locations WHERE status='active' ORDER BY name ASC")
            return [_to_location(r) for r in fetchall(cur)]
