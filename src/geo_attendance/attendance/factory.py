from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, work_start: time) -> AttendanceStrategy:
        # Compared at whole-second granularity: 08:00:00.900 is still 08:00:00.
        time_of_day = now.time().replace(microsecond=0)
        if time_of_day > work_start:
            return LateStrategy()
        return PresentStrategy()
