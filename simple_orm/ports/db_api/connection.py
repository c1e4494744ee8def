"""Lazily created, shared DB-API connection."""

from __future__ import annotations

import contextlib
import os
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from ...utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Connection credentials; equal credentials share one connection."""

    host: str
    username: str
    password: str = field(default="", repr=False)
    database: str = ""
    port: int = 3306

    @classmethod
    def from_env(cls, prefix: str = "SIMPLE_ORM_MYSQL_") -> Credentials:
        """Read credentials from ``<prefix>HOST``, ``PORT``, ``USER``, ``PASSWORD``, ``DATABASE``."""

        return cls(
            host=os.getenv(f"{prefix}HOST", "localhost"),
            username=os.getenv(f"{prefix}USER", "root"),
            password=os.getenv(f"{prefix}PASSWORD", ""),
            database=os.getenv(f"{prefix}DATABASE", "simple_orm"),
            port=int(os.getenv(f"{prefix}PORT", "3306")),
        )


class ConnectionProvider:
    """Owns one live connection per credentials, created on first use.

    The connection is never health-checked or reconnected: a dropped
    connection surfaces as an execution error on the next call. Access
    through ``connection()`` is serialized by a re-entrant lock, so one
    provider can be shared by threads.
    """

    def __init__(
        self,
        connect: Callable[[Credentials], Any],
        credentials: Optional[Credentials] = None,
    ):
        """Create provider.

        Args:
            connect: Factory opening a DB-API connection for credentials.
            credentials: Default credentials used by ``connection()``.
        """

        self._connect = connect
        self._credentials = credentials
        self._connections: dict[Credentials, Any] = {}
        self._lock = threading.RLock()
        self._closed = False

    @classmethod
    def wrap(cls, conn: Any) -> ConnectionProvider:
        """Build a provider around an already open connection."""

        credentials = Credentials(host="", username="", port=0)
        provider = cls(lambda _credentials: conn, credentials)
        provider._connections[credentials] = conn
        return provider

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    def get_connection(self, credentials: Optional[Credentials] = None) -> Any:
        """Return the cached connection for ``credentials``, opening it once."""

        creds = credentials if credentials is not None else self._credentials
        if creds is None:
            raise ValueError("No credentials given and provider has no default credentials.")

        with self._lock:
            if self._closed:
                raise RuntimeError("ConnectionProvider is closed.")
            conn = self._connections.get(creds)
            if conn is None:
                logger.info(
                    "Opening connection to %s:%s/%s as %s",
                    creds.host,
                    creds.port,
                    creds.database,
                    creds.username,
                )
                conn = self._connect(creds)
                self._connections[creds] = conn
            return conn

    @contextlib.contextmanager
    def connection(self) -> Iterator[Any]:
        """Hold the provider lock and yield the shared connection."""

        with self._lock:
            yield self.get_connection()

    def close(self) -> None:
        """Close every cached connection and refuse further use."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            conns = list(self._connections.values())
            self._connections.clear()

        for conn in conns:
            close = getattr(conn, "close", None)
            if callable(close):
                close()
