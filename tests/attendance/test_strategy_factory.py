from datetime import datetime, time

from geo_attendance.attendance.factory import AttendanceStrategyFactory
from geo_attendance.attendance.strategies.late_strategy import LateStrategy
from geo_attendance.attendance.strategies.present_strategy import PresentStrategy
from geo_attendance.core.enums import AttendanceStatus

WORK_START = time(8, 0, 0)


def test_factory_checkin_exactly_at_start_is_present():
    now = datetime(2025, 1, 1, 8, 0, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, work_start=WORK_START)

    assert isinstance(strategy, PresentStrategy)
    assert strategy.decide_checkin(now=now, work_start=WORK_START).status == AttendanceStatus.PRESENT


def test_factory_checkin_one_second_after_start_is_late():
    now = datetime(2025, 1, 1, 8, 0, 1)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, work_start=WORK_START)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=now, work_start=WORK_START).status == AttendanceStatus.LATE


def test_factory_ignores_sub_second_part():
    now = datetime(2025, 1, 1, 8, 0, 0, 999_999)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, work_start=WORK_START)

    assert isinstance(strategy, PresentStrategy)


def test_factory_early_morning_is_present():
    now = datetime(2025, 1, 1, 6, 15, 0)
    assert isinstance(AttendanceStrategyFactory().for_checkin(now=now, work_start=WORK_START), PresentStrategy)


def test_factory_respects_configured_start():
    now = datetime(2025, 1, 1, 8, 45, 0)
    assert isinstance(AttendanceStrategyFactory().for_checkin(now=now, work_start=time(9, 0)), PresentStrategy)
