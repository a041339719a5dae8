from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import to_date_only
from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, run_db
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "id, user_id, username, start_date, end_date, leave_type, reason, status"


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(r["id"]),
        user_id=str(r["user_id"]),
        username=r.get("username") or "",
        start_date=to_date_only(r["start_date"]),
        end_date=to_date_only(r["end_date"]),
        leave_type=LeaveType(r["leave_type"]),
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _list(self) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests")
            return [_row_to_request(r) for r in fetchall(cur)]

    def _get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE id=%s", (request_id,))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def _put(self, request: LeaveRequest) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(id, user_id, username, start_date, end_date, leave_type, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    start_date=VALUES(start_date), end_date=VALUES(end_date),
                    leave_type=VALUES(leave_type), reason=VALUES(reason), status=VALUES(status)
                """,
                (
                    request.request_id,
                    request.user_id,
                    request.username,
                    to_date_only(request.start_date),
                    to_date_only(request.end_date),
                    request.leave_type.value,
                    request.reason,
                    request.status.value,
                ),
            )

    def _delete(self, request_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE id=%s", (request_id,))
            return cur.rowcount > 0

    async def get_leave_requests(self) -> Sequence[LeaveRequest]:
        return await run_db(self._list)

    async def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        return await run_db(self._get_by_id, str(request_id))

    async def put(self, request: LeaveRequest) -> None:
        await run_db(self._put, request)

    async def delete(self, request_id: str) -> bool:
        return await run_db(self._delete, str(request_id))
