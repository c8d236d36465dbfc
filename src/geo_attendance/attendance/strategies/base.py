from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status.

    Only check-in classifies; check-out never revises the status.
    """

    @abstractmethod
    def decide_checkin(self, *, now: datetime, work_start: time) -> StatusDecision:
        raise NotImplementedError
