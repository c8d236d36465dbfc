from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import OfficeLocation


class LocationRepository(Protocol):
    def get_active_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        raise NotImplementedError

    def get_first_active(self) -> Optional[OfficeLocation]:
        """Active location with the lowest id."""

        raise NotImplementedError

    def list_active(self) -> Sequence[OfficeLocation]:
        """All active locations ordered by name."""

        raise NotImplementedError
