from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import DuplicateRecordError, StoreUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_TRANSIENT_ERRORS = (mysql_errors.InterfaceError, mysql_errors.OperationalError, mysql_errors.PoolError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Connection + cursor for one unit of work, committed on success.

    mysql-connector errors are translated into store errors: integrity
    violations become ``DuplicateRecordError``, connection problems and
    timeouts become ``StoreUnavailable``.
    """
    try:
        conn = conn_factory.connect()
    except _TRANSIENT_ERRORS as e:
        logger.error("attendance store unreachable: %s", e)
        raise StoreUnavailable("attendance store unreachable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql_errors.IntegrityError as e:
        conn.rollback()
        raise DuplicateRecordError(str(e)) from e
    except _TRANSIENT_ERRORS as e:
        logger.error("attendance store failed mid-operation: %s", e)
        _safe_rollback(conn)
        raise StoreUnavailable("attendance store unavailable") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except _TRANSIENT_ERRORS:
        # The connection is already gone; the server discards the transaction.
        logger.warning("rollback skipped, connection lost")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
