from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, TypeVar

import mysql.connector

from ..core.exceptions import PersistenceFailure
from .connection import DatabaseConnection

T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


async def run_db(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking repository call on a worker thread.

    Driver errors surface as PersistenceFailure; domain errors raised by
    ``func`` pass through unchanged.
    """
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except mysql.connector.Error as exc:
        raise PersistenceFailure(f"Database error: {exc}") from exc
