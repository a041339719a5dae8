from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import to_canonical_datetime, to_date_only
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, run_db
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, user_id, username, date, check_in, check_out, status, location"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["id"]),
        user_id=str(r["user_id"]),
        username=r.get("username") or "",
        work_date=to_date_only(r["date"]),
        check_in=to_canonical_datetime(r.get("check_in")),
        check_out=to_canonical_datetime(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        location=r.get("location") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance {where}", params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def _get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (attendance_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def _put(self, record: AttendanceRecord) -> None:
        params = (
            record.user_id,
            record.username,
            to_date_only(record.work_date),
            to_canonical_datetime(record.check_in),
            to_canonical_datetime(record.check_out),
            record.status.value,
            record.location,
        )
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT id FROM attendance WHERE id=%s FOR UPDATE", (record.attendance_id,))
                if fetchone(cur):
                    cur.execute(
                        """
                        UPDATE attendance
                        SET user_id=%s, username=%s, date=%s, check_in=%s, check_out=%s, status=%s, location=%s
                        WHERE id=%s
                        """,
                        params + (record.attendance_id,),
                    )
                else:
                    cur.execute(
                        """
                        INSERT INTO attendance(user_id, username, date, check_in, check_out, status, location, id)
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                        """,
                        params + (record.attendance_id,),
                    )
        except mysql.connector.IntegrityError as exc:
            if "uq_attendance_open_session" in str(exc):
                raise ValidationError("You are already checked in") from exc
            raise

    def _delete(self, attendance_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE id=%s", (attendance_id,))
            return cur.rowcount > 0

    async def get_attendance_records(self) -> Sequence[AttendanceRecord]:
        return await run_db(self._select)

    async def get_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        return await run_db(self._select, "WHERE user_id=%s", (str(user_id),))

    async def get_for_user_and_date(self, user_id: str, work_date: str) -> Sequence[AttendanceRecord]:
        return await run_db(self._select, "WHERE user_id=%s AND date=%s", (str(user_id), to_date_only(work_date)))

    async def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return await run_db(self._get_by_id, str(attendance_id))

    async def put(self, record: AttendanceRecord) -> None:
        await run_db(self._put, record)

    async def delete(self, attendance_id: str) -> bool:
        return await run_db(self._delete, str(attendance_id))
