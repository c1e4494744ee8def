"""Concrete SQL dialect implementations for DB-API adapters.

A dialect knows how its driver reports errors and write counters. The set of
error codes that count as a uniqueness violation is explicit per backend.
"""

from __future__ import annotations

from typing import Any, Optional

from ...core.types import ErrorCode


class Dialect:
    """Base dialect: no error code is known to be a uniqueness violation."""

    name: str = "generic"
    unique_violation_codes: frozenset = frozenset()

    def error_types(self, conn: Any) -> tuple[type[BaseException], ...]:
        """Return the driver exception classes the executor translates.

        PEP 249 drivers expose their ``Error`` base class on the connection.
        """

        error = getattr(conn, "Error", None)
        if isinstance(error, type) and issubclass(error, BaseException):
            return (error,)
        return (Exception,)

    def error_code(self, exc: BaseException) -> ErrorCode:
        """Return the driver error code carried by ``exc``, if any."""

        code = getattr(exc, "errno", None)
        if code is not None:
            return code
        args = getattr(exc, "args", ())
        if args and isinstance(args[0], int) and not isinstance(args[0], bool):
            return args[0]
        return None

    def error_message(self, exc: BaseException) -> str:
        """Return the driver diagnostic text, or the exception class name."""

        text = str(exc).strip()
        return text or type(exc).__name__

    def is_unique_violation(self, exc: BaseException) -> bool:
        code = self.error_code(exc)
        return code is not None and code in self.unique_violation_codes

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)

    def get_affected_rows(self, conn: Any, cursor: Any) -> int:
        """Return rows affected by the last statement, never negative."""

        rowcount = getattr(cursor, "rowcount", -1)
        if rowcount is None or rowcount < 0:
            return 0
        return int(rowcount)


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` parameters).

    Relies on ``sqlite3.Error.sqlite_errorcode`` (Python 3.11+), which holds
    the extended result code.
    """

    name = "sqlite"
    # SQLITE_CONSTRAINT_UNIQUE, SQLITE_CONSTRAINT_PRIMARYKEY
    unique_violation_codes = frozenset({2067, 1555})

    def error_code(self, exc: BaseException) -> ErrorCode:
        return getattr(exc, "sqlite_errorcode", None)


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` positional parameters).

    Classifies on SQLSTATE: psycopg 3 exposes ``sqlstate``, psycopg2
    ``pgcode``. ``insert`` cannot report generated keys here; use
    ``INSERT ... RETURNING id`` through ``select`` instead.
    """

    name = "postgres"
    unique_violation_codes = frozenset({"23505"})

    def error_code(self, exc: BaseException) -> ErrorCode:
        code = getattr(exc, "sqlstate", None)
        if code is None:
            code = getattr(exc, "pgcode", None)
        return code


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters).

    PyMySQL and MySQLdb raise errors as ``(errno, message)`` argument pairs;
    mysql-connector exposes ``errno`` and ``msg`` attributes.
    """

    name = "mysql"
    # ER_DUP_ENTRY
    unique_violation_codes = frozenset({1062})

    def error_message(self, exc: BaseException) -> str:
        msg = getattr(exc, "msg", None)
        if isinstance(msg, str) and msg:
            return msg
        args = getattr(exc, "args", ())
        if len(args) >= 2 and isinstance(args[1], str) and args[1]:
            return args[1]
        return super().error_message(exc)

    def get_affected_rows(self, conn: Any, cursor: Any) -> int:
        affected = getattr(conn, "affected_rows", None)
        if callable(affected):
            count = affected()
            # The client library reports "no count" as (unsigned) -1.
            if isinstance(count, int) and 0 <= count < 2**63:
                return count
        return super().get_affected_rows(conn, cursor)
