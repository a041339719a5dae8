"""Attendance ledger: role-scoped visibility, ordering and display fields."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pytz

from ..common.datetime_utils import format_wall_time, hours_between, parse_lenient, to_date_only
from ..core.constants import FULL_SHIFT_HOURS
from ..core.exceptions import ValidationError
from ..core.policy import Capability, can
from ..users.model import User
from ..users.repository import UserRepository
from .model import AttendanceLedgerRow, AttendanceRecord
from .repository import AttendanceRepository

SHORT_SHIFT_ALERT = "Shift Hours Not Complete"


def filter_visible(records: Iterable[AttendanceRecord], viewer: User) -> list[AttendanceRecord]:
    if can(viewer.role, Capability.VIEW_ALL_ATTENDANCE):
        return list(records)
    return [r for r in records if r.user_id == viewer.user_id]


def sort_by_check_in_desc(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    # Missing or unreadable check-in sorts as epoch 0, i.e. last.
    def key(record: AttendanceRecord) -> float:
        parsed = parse_lenient(record.check_in)
        return parsed.timestamp() if parsed else 0.0

    return sorted(records, key=key, reverse=True)


def duration_hours(record: AttendanceRecord) -> Optional[float]:
    check_in = parse_lenient(record.check_in)
    check_out = parse_lenient(record.check_out)
    if check_in is None or check_out is None:
        return None
    return hours_between(check_in, check_out)


def duration_label(record: AttendanceRecord) -> str:
    if record.check_out is None:
        return "Active"
    hours = duration_hours(record)
    if hours is None:
        return "-"
    return f"{hours:.1f}"


def is_short_shift(record: AttendanceRecord) -> bool:
    """Advisory only; separate from the half-day rule and never changes status."""
    if record.check_out is None:
        return False
    hours = duration_hours(record)
    return hours is not None and hours < FULL_SHIFT_HOURS


def to_row(record: AttendanceRecord, tz: pytz.BaseTzInfo) -> AttendanceLedgerRow:
    short = is_short_shift(record)
    return AttendanceLedgerRow(
        attendance_id=record.attendance_id,
        user_id=record.user_id,
        username=record.username,
        date=to_date_only(record.work_date),
        check_in=format_wall_time(record.check_in, tz),
        check_out=format_wall_time(record.check_out, tz),
        hours=duration_label(record),
        status=record.status.value,
        short_shift=short,
        alert=SHORT_SHIFT_ALERT if short else None,
    )


class AttendanceLedgerService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        timezone: pytz.BaseTzInfo | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._tz = timezone or pytz.UTC

    async def visible_records(
        self,
        viewer_id: str,
        *,
        user_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        viewer = await self._users.get_by_id(str(viewer_id))
        if not viewer:
            raise ValidationError("User does not exist")

        records = filter_visible(await self._attendance.get_attendance_records(), viewer)
        if user_id:
            records = [r for r in records if r.user_id == str(user_id)]

        start = to_date_only(start_date)
        end = to_date_only(end_date)
        if start:
            records = [r for r in records if to_date_only(r.work_date) >= start]
        if end:
            records = [r for r in records if to_date_only(r.work_date) <= end]

        return sort_by_check_in_desc(records)

    async def rows(self, viewer_id: str, **filters: Optional[str]) -> Sequence[AttendanceLedgerRow]:
        records = await self.visible_records(viewer_id, **filters)
        return [to_row(r, self._tz) for r in records]
