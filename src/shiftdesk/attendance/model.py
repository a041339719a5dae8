from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_LOCATION
from ..core.enums import AttendanceStatus, SessionState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one shift session.

    ``work_date`` is date-only and ``check_in``/``check_out`` are canonical
    UTC datetimes (``YYYY-MM-DD HH:MM:SS``). A null ``check_out`` marks an
    open session.
    """

    attendance_id: str
    user_id: str
    username: str
    work_date: str
    check_in: Optional[str]
    check_out: Optional[str]
    status: AttendanceStatus
    location: str = DEFAULT_LOCATION

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "username": self.username,
            "date": self.work_date,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "status": self.status.value,
            "location": self.location,
        }


@dataclass(frozen=True)
class AttendanceLedgerRow:
    """Read-model for the ledger table (derived fields are never stored)."""

    attendance_id: str
    user_id: str
    username: str
    date: str
    check_in: str
    check_out: str
    hours: str
    status: str
    short_shift: bool
    alert: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "username": self.username,
            "date": self.date,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "hours": self.hours,
            "status": self.status,
            "short_shift": self.short_shift,
            "alert": self.alert,
        }


@dataclass(frozen=True)
class CurrentSession:
    state: SessionState
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "record": self.record.to_dict() if self.record else None,
        }
