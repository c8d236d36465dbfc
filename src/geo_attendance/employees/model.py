from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee who can log in and record attendance.

    `password_hash` never leaves the service layer; use `to_public_dict`.
    """

    id: int
    nip: str
    name: str
    password_hash: str
    email: Optional[str] = None
    phone: Optional[str] = None
    position: str = "Staff"
    status: RecordStatus = RecordStatus.ACTIVE
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def to_public_dict(self) -> dict:
        return {
            "id": self.id,
            "nip": self.nip,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "position": self.position,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
        }


@dataclass(frozen=True)
class CurrentEmployee:
    """Identity recovered from a bearer token, passed into every protected operation."""

    id: int
    nip: str
    name: str
    email: Optional[str] = None
    position: Optional[str] = None

    @classmethod
    def from_employee(cls, employee: Employee) -> "CurrentEmployee":
        return cls(
            id=employee.id,
            nip=employee.nip,
            name=employee.name,
            email=employee.email,
            position=employee.position,
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "nip": self.nip, "name": self.name, "email": self.email, "position": self.position}
