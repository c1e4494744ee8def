"""Public port exports for concrete adapter implementations."""

from .db_api import (
    ConnectionProvider,
    Credentials,
    Dialect,
    Executor,
    MySQLDialect,
    PoolConnector,
    PostgresDialect,
    SQLiteDialect,
    WriteResult,
    connect,
)

__all__ = [
    "Executor",
    "WriteResult",
    "ConnectionProvider",
    "Credentials",
    "PoolConnector",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "connect",
]
