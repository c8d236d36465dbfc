"""Great-circle distance helpers used by the check-in geofence."""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two points given in decimal degrees.

    Symmetric in its two points and exactly 0 for identical points.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Clamp guards antipodal points where rounding can push `a` past 1.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def round_meters(distance: float) -> int:
    """Round half up to whole meters, the granularity shown to clients."""
    return int(math.floor(distance + 0.5))


def is_within_radius(distance: float, radius_m: int) -> bool:
    return distance <= radius_m
