from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

import pytz

from ..common.datetime_utils import (
    now_utc,
    parse_lenient,
    to_canonical_datetime,
    to_date_only,
    to_wall_clock,
)
from ..core.constants import ATTENDANCE_ID_PREFIX, DEFAULT_LOCATION, MIN_STAY_HOURS
from ..core.enums import AttendanceStatus, NotificationType, SessionState
from ..core.exceptions import PolicyViolation, ValidationError
from ..core.policy import Capability, require
from ..notifications.dispatcher import HierarchyAction, NotificationDispatcher
from ..notifications.messages import attendance_message
from ..users.model import User
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CurrentSession
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"date", "check_in", "check_out", "status", "location"})


def new_attendance_id(user_id: str, created_at: datetime) -> str:
    """User id + creation instant (ms), so a user may hold several sessions a day."""
    millis = int(created_at.timestamp() * 1000)
    return f"{ATTENDANCE_ID_PREFIX}-{user_id}-{millis}"


def _check_in_epoch(record: AttendanceRecord) -> float:
    parsed = parse_lenient(record.check_in)
    return parsed.timestamp() if parsed else 0.0


class AttendanceService:
    """Shift session state machine: NoOpenSession -> OpenSession -> Closed.

    Every transition re-reads the user's sessions from storage, writes the
    record first and only then fans out notifications.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        dispatcher: NotificationDispatcher,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        timezone: pytz.BaseTzInfo | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._users = users
        self._dispatcher = dispatcher
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._tz = timezone or pytz.UTC
        self._clock = clock

    def _now(self, now: datetime | None) -> datetime:
        # parse_lenient turns naive datetimes into UTC instants.
        return parse_lenient(now or self._clock())

    async def _require_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(str(user_id))
        if not user:
            raise ValidationError("User does not exist")
        return user

    async def find_open_session(self, user_id: str) -> Optional[AttendanceRecord]:
        records = await self._attendance.get_for_user(str(user_id))
        open_records = [r for r in records if r.is_open]
        if not open_records:
            return None
        open_records.sort(key=_check_in_epoch, reverse=True)
        return open_records[0]

    async def get_current_session(self, user_id: str, *, now: datetime | None = None) -> CurrentSession:
        """The open session if any, else today's latest closed one."""
        open_record = await self.find_open_session(user_id)
        if open_record:
            return CurrentSession(state=SessionState.OPEN, record=open_record)

        today = to_date_only(to_wall_clock(self._now(now), self._tz))
        todays = list(await self._attendance.get_for_user_and_date(str(user_id), today))
        if not todays:
            return CurrentSession(state=SessionState.NO_SESSION)
        todays.sort(key=_check_in_epoch, reverse=True)
        return CurrentSession(state=SessionState.CLOSED, record=todays[0])

    async def check_in(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        user = await self._require_user(user_id)

        if await self.find_open_session(user.user_id):
            raise ValidationError("You are already checked in")

        wall_now = to_wall_clock(now, self._tz)
        strategy = self._factory.for_checkin(wall_now=wall_now, shift_start=user.shift_start_time)
        decision = strategy.decide_checkin()

        record = AttendanceRecord(
            attendance_id=new_attendance_id(user.user_id, now),
            user_id=user.user_id,
            username=user.username,
            work_date=to_date_only(wall_now),
            check_in=to_canonical_datetime(now),
            check_out=None,
            status=decision.status,
            location=DEFAULT_LOCATION,
        )
        await self._attendance.put(record)
        logger.info("check-in %s user=%s status=%s", record.attendance_id, user.user_id, record.status.value)

        await self._dispatcher.notify_hierarchy(
            user,
            message=attendance_message(user, HierarchyAction.CHECKED_IN.value, wall_now),
            type=NotificationType.ATTENDANCE,
        )
        return record

    async def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        user = await self._require_user(user_id)

        record = await self.find_open_session(user.user_id)
        if not record:
            raise ValidationError("You have no open session to check out of")

        checked_in_at = parse_lenient(record.check_in)
        if checked_in_at is None:
            raise ValidationError("Check-in time of the open session is unreadable")

        elapsed_seconds = (now - checked_in_at).total_seconds()
        duration_minutes = elapsed_seconds / 60
        if duration_minutes < MIN_STAY_HOURS * 60:
            remaining = math.ceil(MIN_STAY_HOURS * 60 - duration_minutes)
            logger.info("check-out refused for %s: %s minute(s) left", user.user_id, remaining)
            raise PolicyViolation(
                f"Minimum stay of {MIN_STAY_HOURS} hour not met. Please wait {remaining} more minute(s).",
                remaining_minutes=remaining,
            )

        duration_hours = elapsed_seconds / 3600
        strategy = self._factory.for_checkout(duration_hours=duration_hours)
        decision = strategy.decide_checkout(current=record.status)

        closed = replace(
            record,
            work_date=to_date_only(record.work_date),
            check_in=to_canonical_datetime(record.check_in),
            check_out=to_canonical_datetime(now),
            status=decision.status,
        )
        await self._attendance.put(closed)
        logger.info(
            "check-out %s user=%s hours=%.2f status=%s",
            closed.attendance_id,
            user.user_id,
            duration_hours,
            closed.status.value,
        )

        await self._dispatcher.notify_hierarchy(
            user,
            message=attendance_message(user, HierarchyAction.CHECKED_OUT.value, to_wall_clock(now, self._tz)),
            type=NotificationType.ATTENDANCE,
        )
        return closed

    async def manual_edit(
        self,
        *,
        actor_id: str,
        attendance_id: Optional[str],
        changes: Mapping[str, Any],
    ) -> AttendanceRecord:
        """Admin override of date/check_in/check_out/status.

        Values are re-normalized to wire format. Status is not re-derived and
        nobody is notified.
        """
        actor = await self._require_user(actor_id)
        require(actor.role, Capability.EDIT_ATTENDANCE, "Only administrators can edit attendance")

        if not attendance_id:
            raise ValidationError("No attendance record selected")
        record = await self._attendance.get_by_id(str(attendance_id))
        if not record:
            raise ValidationError("Attendance record not found")

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        work_date = to_date_only(changes.get("date", record.work_date))
        if not work_date:
            raise ValidationError("Date is required")

        check_in = self._normalize_datetime(changes.get("check_in", record.check_in), "check_in", required=True)
        check_out = self._normalize_datetime(changes.get("check_out", record.check_out), "check_out", required=False)

        status = record.status
        if "status" in changes:
            try:
                status = AttendanceStatus(changes["status"])
            except ValueError:
                raise ValidationError(f"Unknown status: {changes['status']!r}")

        location = str(changes.get("location") or record.location or DEFAULT_LOCATION)

        edited = replace(
            record,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
            location=location,
        )
        await self._attendance.put(edited)
        logger.info("attendance %s edited by %s", edited.attendance_id, actor.user_id)
        return edited

    async def delete(self, *, actor_id: str, attendance_id: str) -> None:
        actor = await self._require_user(actor_id)
        require(actor.role, Capability.DELETE_ATTENDANCE, "Only administrators can delete attendance")

        if not await self._attendance.delete(str(attendance_id)):
            raise ValidationError("Attendance record not found")
        logger.info("attendance %s deleted by %s", attendance_id, actor.user_id)

    async def history(self, user_id: str, *, limit: int = 15) -> Sequence[AttendanceRecord]:
        records = list(await self._attendance.get_for_user(str(user_id)))
        records.sort(key=_check_in_epoch, reverse=True)
        return records[:limit]

    @staticmethod
    def _normalize_datetime(value: Any, field_name: str, *, required: bool) -> Optional[str]:
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                raise ValidationError(f"{field_name} is required")
            return None
        canonical = to_canonical_datetime(value)
        if canonical is None:
            raise ValidationError(f"{field_name} is not a valid date/time")
        return canonical
