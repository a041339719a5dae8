from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from ..core.enums import Role
from ..users.model import User
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# (id, username, full_name, role, department, shift_start_time, team_lead_id, manager_id)
DEMO_USERS = (
    ("U-ADMIN", "admin", "Admin Demo", "ADMIN", "IT", "09:00", None, None),
    ("U-MGR", "manager", "Morgan Manager", "MANAGER", "Operations", "09:00", None, None),
    ("U-TL", "teamlead", "Taylor Lead", "TEAM_LEAD", "Operations", "09:00", None, "U-MGR"),
    ("U-STAFF1", "staff1", "Sam Staff", "STAFF", "Operations", "09:00", "U-TL", "U-MGR"),
    ("U-STAFF2", "staff2", "Riley Staff", "STAFF", "Operations", "08:30", "U-TL", "U-MGR"),
    ("U-HR", "hr", "Harper HR", "HR", "People", "09:00", None, None),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes and drops -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    in_comment = False
    escape = False

    for i, ch in enumerate(sql):
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            continue

        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == "-" and not in_single and not in_double and sql.startswith("--", i):
            in_comment = True
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s", conn_factory.config.database)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert a small reporting forest: admin, manager, team lead, two staff, HR."""
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for user_id, username, full_name, role, department, shift_start, team_lead_id, manager_id in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (id, username, full_name, role, department, shift_start_time, team_lead_id, manager_id, is_active)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE
                    full_name=VALUES(full_name), role=VALUES(role), department=VALUES(department),
                    shift_start_time=VALUES(shift_start_time), team_lead_id=VALUES(team_lead_id),
                    manager_id=VALUES(manager_id), is_active=1
                """,
                (user_id, username, full_name, role, department, shift_start, team_lead_id, manager_id),
            )
        conn.commit()
    finally:
        conn.close()
    logger.info("demo users ready (%d)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def demo_users() -> list[User]:
    """DEMO_USERS as domain objects, for the in-memory backend."""
    return [
        User(
            user_id=user_id,
            username=username,
            full_name=full_name,
            role=Role(role),
            department=department,
            shift_start_time=shift_start,
            team_lead_id=team_lead_id,
            manager_id=manager_id,
        )
        for user_id, username, full_name, role, department, shift_start, team_lead_id, manager_id in DEMO_USERS
    ]
