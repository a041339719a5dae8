from datetime import datetime

from shiftdesk.attendance.factory import AttendanceStrategyFactory
from shiftdesk.attendance.strategies.base import CheckInStrategy, CheckOutStrategy
from shiftdesk.attendance.strategies.half_day_strategy import HalfDayStrategy
from shiftdesk.attendance.strategies.late_strategy import LateStrategy
from shiftdesk.attendance.strategies.normal_strategy import NormalStrategy
from shiftdesk.core.enums import AttendanceStatus


def test_factory_checkin_on_time_at_end_of_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(wall_now=datetime(2025, 1, 6, 9, 30, 0), shift_start="09:00")

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin().status == AttendanceStatus.PRESENT


def test_factory_checkin_late_one_second_after_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(wall_now=datetime(2025, 1, 6, 9, 30, 1), shift_start="09:00")

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin().status == AttendanceStatus.LATE


def test_factory_checkin_uses_default_shift_when_unset():
    factory = AttendanceStrategyFactory()
    assert isinstance(factory.for_checkin(wall_now=datetime(2025, 1, 6, 9, 31), shift_start=None), LateStrategy)


def test_factory_checkin_respects_custom_shift_start():
    factory = AttendanceStrategyFactory()
    assert isinstance(factory.for_checkin(wall_now=datetime(2025, 1, 6, 9, 1), shift_start="08:30"), LateStrategy)
    assert isinstance(factory.for_checkin(wall_now=datetime(2025, 1, 6, 10, 0), shift_start="10:00"), NormalStrategy)


def test_factory_checkout_half_day_below_threshold():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(duration_hours=4.99)

    assert isinstance(strategy, HalfDayStrategy)
    assert strategy.decide_checkout(current=AttendanceStatus.LATE).status == AttendanceStatus.HALF_DAY


def test_factory_checkout_keeps_status_at_threshold():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(duration_hours=5.0)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(current=AttendanceStatus.LATE).status == AttendanceStatus.LATE


def test_checkin_and_checkout_strategies_are_separate_roles():
    assert not isinstance(LateStrategy(), CheckOutStrategy)
    assert not isinstance(HalfDayStrategy(), CheckInStrategy)
    assert isinstance(NormalStrategy(), CheckInStrategy)
    assert isinstance(NormalStrategy(), CheckOutStrategy)
