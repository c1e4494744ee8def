"""Simple thread-safe DB-API connection pool."""

from __future__ import annotations

import contextlib
import threading
import time
from collections.abc import Callable, Iterator
from typing import Any

from ...utils.logging import get_logger

logger = get_logger(__name__)


class PoolConnector:
    """Small fixed-size pool; each checkout gets a dedicated connection."""

    def __init__(
        self,
        connect: Callable[..., Any],
        *connect_args: Any,
        max_size: int = 5,
        **connect_kwargs: Any,
    ):
        if max_size < 1:
            raise ValueError("max_size must be >= 1.")
        if max_size > 1 and self._is_private_sqlite_memory(connect, connect_args, connect_kwargs):
            raise ValueError(
                "PoolConnector detected sqlite private in-memory database with max_size > 1. "
                "Every pooled connection would see its own empty database; use max_size=1."
            )

        self._connect = connect
        self._connect_args = connect_args
        self._connect_kwargs = connect_kwargs
        self._max_size = max_size

        self._idle: list[Any] = []
        self._borrowed_ids: set[int] = set()
        self._total = 0
        self._closed = False
        self._condition = threading.Condition()

    def _is_private_sqlite_memory(
        self,
        connect: Callable[..., Any],
        connect_args: tuple[Any, ...],
        connect_kwargs: dict[str, Any],
    ) -> bool:
        module_name = getattr(connect, "__module__", "") or ""
        if not (module_name.startswith("sqlite3") or module_name.startswith("_sqlite3")):
            return False
        database = connect_args[0] if connect_args else connect_kwargs.get("database")
        return database == ":memory:"

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def in_use(self) -> int:
        with self._condition:
            return len(self._borrowed_ids)

    def acquire(self, timeout: float | None = None) -> Any:
        """Borrow one connection, opening a new one while below ``max_size``."""

        deadline = None if timeout is None else (time.monotonic() + timeout)
        with self._condition:
            while True:
                self._ensure_open()
                if self._idle:
                    conn = self._idle.pop()
                    self._borrowed_ids.add(id(conn))
                    return conn

                if self._total < self._max_size:
                    # Reserve the slot before connecting outside the lock.
                    self._total += 1
                    break

                if deadline is None:
                    self._condition.wait()
                    continue

                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError("Timed out waiting for a pooled DB connection.")
                self._condition.wait(remaining)

        try:
            conn = self._connect(*self._connect_args, **self._connect_kwargs)
        except BaseException:
            with self._condition:
                self._total -= 1
                self._condition.notify()
            raise

        logger.info("Opened pooled connection (%d/%d)", self._total, self._max_size)
        with self._condition:
            if not self._closed:
                self._borrowed_ids.add(id(conn))
                return conn
            self._total -= 1
            self._condition.notify()
        self._close_connection(conn)
        raise RuntimeError("PoolConnector is closed.")

    def release(self, conn: Any) -> None:
        """Return one borrowed connection, rolling back any open transaction."""

        conn_id = id(conn)
        with self._condition:
            if conn_id not in self._borrowed_ids:
                raise ValueError("Connection was not acquired from this pool or already released.")
            self._borrowed_ids.remove(conn_id)

        discard = False
        cleanup_error: Exception | None = None
        if self._connection_in_transaction(conn):
            rollback = getattr(conn, "rollback", None)
            try:
                if callable(rollback):
                    rollback()
                else:
                    discard = True
            except Exception as exc:
                cleanup_error = exc
                discard = True

        with self._condition:
            if self._closed or discard:
                self._total -= 1
                discard = True
            else:
                self._idle.append(conn)
            self._condition.notify()

        if discard:
            self._close_connection(conn)
        if cleanup_error is not None:
            raise RuntimeError(
                "Failed to roll back pooled DB connection before returning it."
            ) from cleanup_error

    @contextlib.contextmanager
    def connection(self, timeout: float | None = None) -> Iterator[Any]:
        """Borrow and auto-release one connection with a context manager."""

        conn = self.acquire(timeout=timeout)
        try:
            yield conn
        except BaseException:
            # Keep the in-flight error; a failed cleanup is only logged.
            try:
                self.release(conn)
            except Exception:
                logger.warning("Releasing pooled connection after a failed call also failed", exc_info=True)
            raise
        else:
            self.release(conn)

    def close(self) -> None:
        """Close all idle pooled connections and prevent future acquire."""

        with self._condition:
            if self._closed:
                return
            self._closed = True
            idle = list(self._idle)
            self._idle.clear()
            self._total -= len(idle)
            self._condition.notify_all()

        for conn in idle:
            self._close_connection(conn)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("PoolConnector is closed.")

    def _close_connection(self, conn: Any) -> None:
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def _connection_in_transaction(self, conn: Any) -> bool:
        in_tx = getattr(conn, "in_transaction", None)
        if isinstance(in_tx, bool):
            return in_tx

        info = getattr(conn, "info", None)
        tx_status = getattr(info, "transaction_status", None)
        if tx_status is not None:
            # psycopg3: 0 = idle.
            return tx_status != 0

        # PyMySQL does not track it; roll back unless autocommit is on.
        get_autocommit = getattr(conn, "get_autocommit", None)
        if callable(get_autocommit):
            return not get_autocommit()
        return False
