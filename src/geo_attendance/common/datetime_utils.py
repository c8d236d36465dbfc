from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional
from zoneinfo import ZoneInfo


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM[:SS] into a time. Raises ValueError on malformed input."""
    parts = value.strip().split(":")
    if not 2 <= len(parts) <= 3:
        raise ValueError(f"Invalid time of day: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 and parts[2] else 0
    return time(hour=hours, minute=minutes, second=seconds)


def now_local(timezone: Optional[str] = None) -> datetime:
    """Current wall-clock time as a naive datetime.

    Server-local unless an IANA zone is given, in which case the wall clock of
    that zone is returned (tzinfo dropped, matching how timestamps are stored).

    Note: Wrapped so tests can patch/mocked easier.
    """
    if timezone:
        return datetime.now(ZoneInfo(timezone)).replace(tzinfo=None)
    return datetime.now()


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value else None


@dataclass(frozen=True)
class WorkDuration:
    minutes: int

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "WorkDuration":
        return cls(minutes=int(round((end - start).total_seconds() / 60)))

    @property
    def hours(self) -> str:
        return f"{self.minutes / 60:.2f}"

    @property
    def formatted(self) -> str:
        return f"{self.minutes // 60}h {self.minutes % 60}m"

    def to_dict(self) -> dict:
        return {"minutes": self.minutes, "hours": self.hours, "formatted": self.formatted}
