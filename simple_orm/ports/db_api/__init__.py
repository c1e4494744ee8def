"""DB-API executor, connection sources, and dialect exports."""

from .connection import ConnectionProvider, Credentials
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .executor import Executor, WriteResult
from .mysql import connect
from .pool_connector import PoolConnector

__all__ = [
    "ConnectionProvider",
    "Credentials",
    "Dialect",
    "Executor",
    "MySQLDialect",
    "PoolConnector",
    "PostgresDialect",
    "SQLiteDialect",
    "WriteResult",
    "connect",
]
