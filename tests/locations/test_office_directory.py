from __future__ import annotations

import pytest

from geo_attendance.core.enums import RecordStatus
from geo_attendance.core.exceptions import LocationNotFoundError, NotFoundError, ValidationError
from geo_attendance.locations.model import OfficeLocation


def test_default_is_lowest_active_id(container):
    assert container.office_directory.resolve().id == 1
    assert container.office_directory.resolve("").id == 1


def test_configured_default_wins(container_factory):
    assert container_factory(default_location_id=2).office_directory.resolve().id == 2


def test_inactive_office_is_never_resolved(container_factory, hq, branch):
    closed = OfficeLocation(id=1, name=hq.name, latitude=hq.latitude, longitude=hq.longitude, radius=100, status=RecordStatus.INACTIVE)
    directory = container_factory(locations=[closed, branch]).office_directory

    assert directory.resolve().id == 2
    with pytest.raises(LocationNotFoundError):
        directory.resolve(1)
    assert [loc.id for loc in directory.list()] == [2]


def test_explicit_id_accepts_numeric_strings(container):
    assert container.office_directory.resolve("2").id == 2


def test_resolve_rejects_non_numeric_id(container):
    with pytest.raises(ValidationError, match="Invalid location id"):
        container.office_directory.resolve("abc")


def test_get_unknown_or_malformed_id_is_not_found(container):
    with pytest.raises(NotFoundError, match="Location not found"):
        container.office_directory.get(99)
    with pytest.raises(NotFoundError, match="Location not found"):
        container.office_directory.get("abc")


def test_list_is_sorted_by_name(container):
    assert [loc.name for loc in container.office_directory.list()] == ["Kantor Cabang Bandung", "Kantor Pusat"]


def test_office_radius_must_be_positive():
    with pytest.raises(ValueError):
        OfficeLocation(id=9, name="Nowhere", latitude=0, longitude=0, radius=0)


def test_integral_float_ids_select_that_office(container):
    assert container.office_directory.resolve(2.0).id == 2
    assert container.office_directory.resolve("2.0").id == 2


@pytest.mark.parametrize("location_id", [1.5, "2.5", "nan", True])
def test_non_integral_ids_are_rejected(container, location_id):
    with pytest.raises(ValidationError, match="Invalid location id"):
        container.office_directory.resolve(location_id)


@pytest.mark.parametrize("location_id", [0, "0", 0.0])
def test_zero_id_selects_the_default_office(container_factory, location_id):
    assert container_factory().office_directory.resolve(location_id).id == 1
    assert container_factory(default_location_id=2).office_directory.resolve(location_id).id == 2
