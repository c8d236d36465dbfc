from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.exceptions import LocationNotFoundError, NotFoundError, ValidationError
from .model import OfficeLocation
from .repository import LocationRepository


class OfficeDirectory:
    """Resolves which office geofence a check-in is validated against.

    An omitted (or 0) location id resolves to `default_location_id` when
    configured, otherwise to the lowest-id active office.
    """

    def __init__(self, locations: LocationRepository, *, default_location_id: Optional[int] = None):
        self._locations = locations
        self._default_location_id = default_location_id

    def resolve(self, location_id: Any = None) -> OfficeLocation:
        parsed = None if location_id is None or location_id == "" else self._parse_id(location_id)
        # 0 selects no office, same as an omitted id
        if not parsed:
            location = self._default()
        else:
            location = self._locations.get_active_by_id(parsed)

        if not location:
            raise LocationNotFoundError("Office location not found. Please contact admin.")
        return location

    def get(self, location_id: Any) -> OfficeLocation:
        try:
            parsed = self._parse_id(location_id)
        except ValidationError:
            raise NotFoundError("Location not found")

        location = self._locations.get_active_by_id(parsed)
        if not location:
            raise NotFoundError("Location not found")
        return location

    def list(self) -> Sequence[OfficeLocation]:
        return list(self._locations.list_active())

    def _default(self) -> Optional[OfficeLocation]:
        if self._default_location_id is not None:
            return self._locations.get_active_by_id(self._default_location_id)
        return self._locations.get_first_active()

    @staticmethod
    def _parse_id(location_id: Any) -> int:
        if isinstance(location_id, bool):
            raise ValidationError("Invalid location id")
        text = str(location_id).strip()
        try:
            return int(text)
        except ValueError:
            pass

        # JSON clients may send 1.0 for 1
        try:
            number = float(text)
        except ValueError:
            raise ValidationError("Invalid location id")
        if not number.is_integer():
            raise ValidationError("Invalid location id")
        return int(number)
