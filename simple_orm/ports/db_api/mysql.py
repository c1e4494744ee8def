"""MySQL executor factory backed by PyMySQL.

This adapter requires the `pymysql` package installed.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Optional

from .connection import ConnectionProvider, Credentials
from .dialects import MySQLDialect
from .executor import Executor
from .pool_connector import PoolConnector


def _load_pymysql() -> Any:
    try:
        import pymysql  # type: ignore[import-untyped]
    except ImportError as exc:  # pragma: no cover - env dependent
        raise ImportError(
            "pymysql is required for the MySQL executor. "
            "Install with `pip install pymysql`."
        ) from exc
    return pymysql


def open_connection(credentials: Credentials, **driver_kwargs: Any) -> Any:
    """Open one PyMySQL connection for ``credentials``."""

    pymysql = _load_pymysql()
    options: dict[str, Any] = {"charset": "utf8mb4", "autocommit": False}
    options.update(driver_kwargs)
    return pymysql.connect(
        host=credentials.host,
        port=credentials.port,
        user=credentials.username,
        password=credentials.password,
        database=credentials.database,
        **options,
    )


def connect(
    host: str,
    username: str,
    password: str,
    database: str,
    *,
    port: int = 3306,
    pool_size: Optional[int] = None,
    **driver_kwargs: Any,
) -> Executor:
    """Create a MySQL executor.

    No connection is opened until the first call.

    Args:
        host: Server host name.
        username: Login user.
        password: Login password.
        database: Default schema.
        port: Server port.
        pool_size: Use a `PoolConnector` with this many connections instead of
            one shared connection.
        **driver_kwargs: Extra keyword arguments for `pymysql.connect`.
    """

    _load_pymysql()
    credentials = Credentials(
        host=host,
        username=username,
        password=password,
        database=database,
        port=port,
    )
    opener = partial(open_connection, **driver_kwargs)
    if pool_size is not None:
        return Executor(PoolConnector(opener, credentials, max_size=pool_size), MySQLDialect())
    return Executor(ConnectionProvider(opener, credentials), MySQLDialect())
