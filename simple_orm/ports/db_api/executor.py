"""Parameterized SQL execution over a DB-API connection source."""

from __future__ import annotations

import contextlib
import threading
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from ...core.contracts import ConnectionSource, DialectPort
from ...core.errors import OrmError, SimpleOrmError, UniquenessError
from ...core.params import BoundParams, bind_params
from ...core.rows import Row, rows_from_cursor
from ...core.types import QueryParams
from ...utils.logging import get_logger
from .connection import ConnectionProvider

logger = get_logger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Counters read after a successful write statement."""

    affected_rows: int
    last_insert_id: int


class Executor:
    """Runs raw SQL with positional parameters and classifies driver errors.

    Every call checks out a connection, opens one cursor, binds, executes and
    closes the cursor exactly once. Outside ``transaction()`` each call is
    committed on success and rolled back on failure.
    """

    def __init__(self, source: Any | ConnectionSource, dialect: DialectPort):
        """Create executor.

        Args:
            source: Any `ConnectionSource` (`ConnectionProvider`, `PoolConnector`
                or a custom one), or a bare DB-API connection, which is wrapped
                in a provider that serializes access to it.
            dialect: Concrete SQL dialect instance.
        """

        if isinstance(source, ConnectionSource):
            self._source = source
        else:
            self._source = ConnectionProvider.wrap(source)
        self.dialect = dialect
        self._local = threading.local()

    @property
    def source(self) -> ConnectionSource:
        return self._source

    def insert(self, sql: str, params: QueryParams = None) -> int:
        """Execute a write and return the last auto-generated identifier.

        Raises:
            UniquenessError: The write violated a unique constraint.
            OrmError: Any other preparation or execution failure.
        """

        return self._write(sql, params).last_insert_id

    def exec(self, sql: str, params: QueryParams = None) -> int:
        """Execute a write and return the number of affected rows.

        Raises:
            UniquenessError: The write violated a unique constraint.
            OrmError: Any other preparation or execution failure.
        """

        return self._write(sql, params).affected_rows

    def select(self, sql: str, params: QueryParams = None) -> List[Row]:
        """Execute a query and return every row, fully materialized.

        Raises:
            OrmError: Preparation, execution, or result retrieval failed.
        """

        bound = bind_params(params)
        self._log_statement(sql, bound)
        with self._checkout() as (conn, pinned):
            errors = self.dialect.error_types(conn)
            cur = self._open_cursor(conn, errors)
            try:
                try:
                    self._execute(cur, sql, bound)
                except errors as exc:
                    raise self._classify(exc, classify_unique=False) from exc

                if getattr(cur, "description", None) is None:
                    raise OrmError("Statement did not produce a result set.")

                try:
                    raw_rows = cur.fetchall()
                except errors as exc:
                    raise self._classify(exc, classify_unique=False) from exc
                rows = rows_from_cursor(cur, raw_rows)
            finally:
                self._close_cursor(cur)

            if not pinned:
                self._commit(conn, errors, classify_unique=False)
        return rows

    @contextlib.contextmanager
    def transaction(self) -> Iterator[Executor]:
        """Run calls on one connection; commit on success, roll back on error.

        Nested blocks join the outermost transaction.
        """

        if getattr(self._local, "conn", None) is not None:
            yield self
            return

        with self._source.connection() as conn:
            if self._should_begin_sqlite_transaction(conn):
                errors = self.dialect.error_types(conn)
                try:
                    conn.execute("BEGIN")
                except errors as exc:
                    raise self._classify(exc, classify_unique=False) from exc
            self._local.conn = conn
            try:
                yield self
            except BaseException:
                self._rollback(conn)
                raise
            finally:
                self._local.conn = None

            errors = self.dialect.error_types(conn)
            try:
                self._commit(conn, errors, classify_unique=True)
            except SimpleOrmError:
                self._rollback(conn)
                raise

    def close(self) -> None:
        """Close the underlying provider or pool."""

        self._source.close()

    def __enter__(self) -> Executor:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    def _write(self, sql: str, params: QueryParams) -> WriteResult:
        bound = bind_params(params)
        self._log_statement(sql, bound)
        with self._checkout() as (conn, pinned):
            errors = self.dialect.error_types(conn)
            cur = self._open_cursor(conn, errors)
            try:
                try:
                    self._execute(cur, sql, bound)
                except errors as exc:
                    # Classify while the cursor is still open.
                    raise self._classify(exc, classify_unique=True) from exc

                affected = self.dialect.get_affected_rows(conn, cur)
                last_id = self.dialect.get_lastrowid(cur) or 0
            finally:
                self._close_cursor(cur)

            if not pinned:
                self._commit(conn, errors, classify_unique=True)
        return WriteResult(affected_rows=affected, last_insert_id=int(last_id))

    @contextlib.contextmanager
    def _checkout(self) -> Iterator[Tuple[Any, bool]]:
        """Yield ``(connection, pinned)``; pinned inside ``transaction()``.

        An unpinned connection is rolled back when the call fails.
        """

        pinned = getattr(self._local, "conn", None)
        if pinned is not None:
            yield pinned, True
            return
        with self._source.connection() as conn:
            try:
                yield conn, False
            except BaseException:
                self._rollback(conn)
                raise

    def _open_cursor(self, conn: Any, errors: tuple[type[BaseException], ...]) -> Any:
        try:
            return conn.cursor()
        except errors as exc:
            raise self._classify(exc, classify_unique=False) from exc

    def _execute(self, cur: Any, sql: str, bound: Optional[BoundParams]) -> None:
        if bound is None:
            cur.execute(sql)
        else:
            cur.execute(sql, bound.values)

    def _close_cursor(self, cur: Any) -> None:
        close = getattr(cur, "close", None)
        if callable(close):
            close()

    def _classify(self, exc: BaseException, *, classify_unique: bool) -> SimpleOrmError:
        if classify_unique and self.dialect.is_unique_violation(exc):
            logger.debug("Unique constraint violation (%s)", self.dialect.error_code(exc))
            return UniquenessError()
        message = self.dialect.error_message(exc)
        logger.debug("Statement failed (%s): %s", self.dialect.error_code(exc), message)
        return OrmError(message)

    def _commit(
        self,
        conn: Any,
        errors: tuple[type[BaseException], ...],
        *,
        classify_unique: bool,
    ) -> None:
        commit = getattr(conn, "commit", None)
        if not callable(commit):
            return
        try:
            commit()
        except errors as exc:
            raise self._classify(exc, classify_unique=classify_unique) from exc

    def _rollback(self, conn: Any) -> None:
        rollback = getattr(conn, "rollback", None)
        if not callable(rollback):
            return
        try:
            rollback()
        except Exception:
            logger.warning("Rollback after failed call also failed", exc_info=True)

    def _should_begin_sqlite_transaction(self, conn: Any) -> bool:
        if self.dialect.name != "sqlite":
            return False
        if getattr(conn, "isolation_level", None) is not None:
            return False
        return not bool(getattr(conn, "in_transaction", False))

    def _log_statement(self, sql: str, bound: Optional[BoundParams]) -> None:
        logger.debug("Executing %s [types=%s]", sql, bound.types if bound else "")
