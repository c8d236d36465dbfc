from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Read-only employee directory.

    Provisioning happens outside the application (seed scripts, admin tools).
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_active_by_nip(self, nip: str) -> Optional[Employee]:
        raise NotImplementedError
