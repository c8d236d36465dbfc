from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def parse_coordinates(latitude: Any, longitude: Any, *, check_range: bool = True) -> tuple[float, float]:
    """Validate a submitted (latitude, longitude) pair.

    Missing values, non-numeric values and (optionally) out-of-range values
    each raise `ValidationError` with their own message.
    """
    if _is_missing(latitude) or _is_missing(longitude):
        raise ValidationError("Latitude and longitude are required")

    lat = _to_float(latitude)
    lng = _to_float(longitude)
    if lat is None or lng is None:
        raise ValidationError("Invalid coordinates format")

    if check_range and not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise ValidationError("Coordinates out of valid range")

    return lat, lng


def parse_optional_int(value: Any, field_name: str, *, default: Optional[int] = None) -> Optional[int]:
    if _is_missing(value):
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer")


def parse_non_negative_int(value: Any, field_name: str, *, default: int) -> int:
    parsed = parse_optional_int(value, field_name, default=default)
    if parsed is None or parsed < 0:
        raise ValidationError(f"{field_name} must be a non-negative integer")
    return parsed


def clean_notes(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
