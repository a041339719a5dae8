from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, run_db
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, username, full_name, role, department, shift_start_time, team_lead_id, manager_id, is_active"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=str(row["id"]),
        username=row["username"],
        full_name=row.get("full_name") or "",
        role=Role(row["role"]),
        department=row.get("department") or "Unassigned",
        shift_start_time=row.get("shift_start_time"),
        team_lead_id=row.get("team_lead_id") or None,
        manager_id=row.get("manager_id") or None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def _list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY username")
            return [_row_to_user(r) for r in fetchall(cur)]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await run_db(self._get_by_id, str(user_id))

    async def list_all(self) -> Sequence[User]:
        return await run_db(self._list_all)
