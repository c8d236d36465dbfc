from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class OfficeLocation:
    """Domain entity: an office and the geofence radius around it (meters)."""

    id: int
    name: str
    latitude: float
    longitude: float
    radius: int
    address: Optional[str] = None
    status: RecordStatus = RecordStatus.ACTIVE
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"Office radius must be positive, got {self.radius}")

    def summary(self) -> dict:
        return {"id": self.id, "name": self.name, "address": self.address}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius": self.radius,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
        }
