from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage port for attendance sessions.

    ``put`` is an upsert keyed by ``attendance_id``; put and delete are each
    atomic per record. No multi-record transactions are offered.
    """

    async def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def get_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def get_for_user_and_date(self, user_id: str, work_date: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    async def put(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    async def delete(self, attendance_id: str) -> bool:
        raise NotImplementedError
