from __future__ import annotations

import asyncio

import pytest
import pytz

from shiftdesk.attendance.ledger import (
    SHORT_SHIFT_ALERT,
    AttendanceLedgerService,
    duration_label,
    is_short_shift,
    sort_by_check_in_desc,
)
from shiftdesk.attendance.model import AttendanceRecord
from shiftdesk.core.enums import AttendanceStatus
from shiftdesk.core.exceptions import ValidationError


def _record(attendance_id, user_id, check_in, check_out=None, status=AttendanceStatus.PRESENT):
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        username=user_id.lower(),
        work_date=(check_in or "2025-01-01")[:10],
        check_in=check_in,
        check_out=check_out,
        status=status,
    )


@pytest.fixture
def seeded(store):
    records = [
        _record("r1", "S1", "2025-01-06 09:00:00", "2025-01-06 17:00:00"),
        _record("r2", "S1", "2025-01-07 09:00:00", "2025-01-07 13:00:00", AttendanceStatus.HALF_DAY),
        _record("r3", "S2", "2025-01-07T08:00:00.000Z", None),
        _record("r4", "TL1", "2025-01-08 09:00:00", "2025-01-08 16:00:00"),
    ]
    for record in records:
        asyncio.run(store.attendance.put(record))
    return store


def test_duration_labels():
    assert duration_label(_record("a", "S1", "2025-01-06 09:00:00")) == "Active"
    assert duration_label(_record("b", "S1", "2025-01-06 09:00:00", "2025-01-06 17:00:00")) == "8.0"
    assert duration_label(_record("c", "S1", "2025-01-06 09:00:00", "2025-01-06 13:18:00")) == "4.3"
    assert duration_label(_record("d", "S1", "garbage", "2025-01-06 13:15:00")) == "-"


def test_short_shift_flag_is_separate_from_half_day():
    seven_hours = _record("a", "S1", "2025-01-06 09:00:00", "2025-01-06 16:00:00")
    full = _record("b", "S1", "2025-01-06 09:00:00", "2025-01-06 16:30:00")
    open_session = _record("c", "S1", "2025-01-06 09:00:00")

    assert is_short_shift(seven_hours)
    assert seven_hours.status == AttendanceStatus.PRESENT
    assert not is_short_shift(full)
    assert not is_short_shift(open_session)


def test_sort_puts_unreadable_check_in_last():
    records = [
        _record("old", "S1", "2025-01-05 09:00:00"),
        _record("bad", "S1", None),
        _record("new", "S1", "2025-01-06T09:00:00Z"),
    ]
    assert [r.attendance_id for r in sort_by_check_in_desc(records)] == ["new", "old", "bad"]


def test_staff_sees_only_own_rows(seeded, container):
    rows = asyncio.run(container.ledger_service.rows("S1"))
    assert [r.attendance_id for r in rows] == ["r2", "r1"]


def test_team_lead_sees_only_own_attendance(seeded, container):
    rows = asyncio.run(container.ledger_service.rows("TL1"))
    assert [r.attendance_id for r in rows] == ["r4"]


@pytest.mark.parametrize("viewer", ["A1", "M1"])
def test_admin_and_manager_see_everything_newest_first(seeded, container, viewer):
    rows = asyncio.run(container.ledger_service.rows(viewer))
    assert [r.attendance_id for r in rows] == ["r4", "r2", "r3", "r1"]


def test_rows_carry_display_fields(seeded, container):
    rows = {r.attendance_id: r for r in asyncio.run(container.ledger_service.rows("A1"))}

    assert rows["r1"].check_in == "09:00"
    assert rows["r1"].hours == "8.0"
    assert rows["r1"].alert is None
    assert rows["r2"].short_shift is True
    assert rows["r2"].alert == SHORT_SHIFT_ALERT
    assert rows["r2"].status == "HALF-DAY"
    assert rows["r3"].hours == "Active"
    assert rows["r3"].check_out == "-"
    assert rows["r3"].date == "2025-01-07"


def test_filters_by_user_and_date_range(seeded, container):
    ledger = container.ledger_service

    by_user = asyncio.run(ledger.visible_records("A1", user_id="S1"))
    assert {r.attendance_id for r in by_user} == {"r1", "r2"}

    in_range = asyncio.run(ledger.visible_records("A1", start_date="2025-01-07", end_date="2025-01-07T23:59:59Z"))
    assert {r.attendance_id for r in in_range} == {"r2", "r3"}


def test_staff_filter_cannot_widen_visibility(seeded, container):
    assert asyncio.run(container.ledger_service.visible_records("S1", user_id="S2")) == []


def test_rows_use_configured_wall_clock(seeded, store):
    ledger = AttendanceLedgerService(store.attendance, store.users, timezone=pytz.timezone("Asia/Ho_Chi_Minh"))
    rows = {r.attendance_id: r for r in asyncio.run(ledger.rows("A1"))}
    assert rows["r1"].check_in == "16:00"


def test_unknown_viewer_is_rejected(container):
    with pytest.raises(ValidationError):
        asyncio.run(container.ledger_service.rows("ghost"))
