"""In-memory application state store.

Implements every repository port over plain dicts. Used for the ``memory``
storage backend and by the test-suite. Each put/delete replaces a single
entry, which keeps the per-record atomicity the services rely on.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from itertools import count
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_utc, parse_lenient, to_canonical_datetime, to_date_only
from ..core.enums import NotificationType
from ..leaves.model import LeaveRequest
from ..notifications.model import Notification
from ..users.model import User


class InMemoryUserRepository:
    def __init__(self, users: Iterable[User] = ()):
        self._users: dict[str, User] = {u.user_id: u for u in users}

    def add(self, user: User) -> None:
        self._users[user.user_id] = user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(str(user_id))

    async def list_all(self) -> Sequence[User]:
        return list(self._users.values())


class InMemoryAttendanceRepository:
    def __init__(self):
        self._records: dict[str, AttendanceRecord] = {}

    async def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        return list(self._records.values())

    async def get_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        return [r for r in self._records.values() if r.user_id == str(user_id)]

    async def get_for_user_and_date(self, user_id: str, work_date: str) -> Sequence[AttendanceRecord]:
        day = to_date_only(work_date)
        return [
            r
            for r in self._records.values()
            if r.user_id == str(user_id) and to_date_only(r.work_date) == day
        ]

    async def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return self._records.get(str(attendance_id))

    async def put(self, record: AttendanceRecord) -> None:
        self._records[record.attendance_id] = record

    async def delete(self, attendance_id: str) -> bool:
        return self._records.pop(str(attendance_id), None) is not None


class InMemoryLeaveRepository:
    def __init__(self):
        self._requests: dict[str, LeaveRequest] = {}

    async def get_leave_requests(self) -> Sequence[LeaveRequest]:
        return list(self._requests.values())

    async def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        return self._requests.get(str(request_id))

    async def put(self, request: LeaveRequest) -> None:
        self._requests[request.request_id] = request

    async def delete(self, request_id: str) -> bool:
        return self._requests.pop(str(request_id), None) is not None


class InMemoryNotificationRepository:
    def __init__(self, *, clock: Callable = now_utc):
        self._items: dict[int, Notification] = {}
        self._ids = count(1)
        self._clock = clock

    async def create(
        self,
        *,
        recipient_id: str,
        sender_name: str,
        message: str,
        type: NotificationType,
        is_read: bool = False,
    ) -> Notification:
        notification = Notification(
            notification_id=next(self._ids),
            recipient_id=str(recipient_id),
            sender_name=sender_name,
            message=message,
            type=NotificationType(type),
            is_read=bool(is_read),
            timestamp=to_canonical_datetime(self._clock()),
        )
        self._items[notification.notification_id] = notification
        return notification

    async def list_for_recipient(self, recipient_id: str, *, limit: int = 100) -> Sequence[Notification]:
        items = [n for n in self._items.values() if n.recipient_id == str(recipient_id)]
        items.sort(key=lambda n: (parse_lenient(n.timestamp), n.notification_id), reverse=True)
        return items[:limit]

    async def count_unread(self, recipient_id: str) -> int:
        return sum(1 for n in self._items.values() if n.recipient_id == str(recipient_id) and not n.is_read)

    async def mark_read(self, recipient_id: str, notification_ids: Iterable[int]) -> int:
        changed = 0
        for notification_id in notification_ids:
            item = self._items.get(int(notification_id))
            if item and item.recipient_id == str(recipient_id) and not item.is_read:
                self._items[item.notification_id] = replace(item, is_read=True)
                changed += 1
        return changed

    def all(self) -> list[Notification]:
        return list(self._items.values())


@dataclass
class InMemoryStore:
    users: InMemoryUserRepository = field(default_factory=InMemoryUserRepository)
    attendance: InMemoryAttendanceRepository = field(default_factory=InMemoryAttendanceRepository)
    leaves: InMemoryLeaveRepository = field(default_factory=InMemoryLeaveRepository)
    notifications: InMemoryNotificationRepository = field(default_factory=InMemoryNotificationRepository)
