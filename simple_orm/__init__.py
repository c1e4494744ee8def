"""Minimal parameterized SQL execution over DB-API drivers."""

from .core import (
    BoundParams,
    ErrorKind,
    OrmError,
    ParamType,
    Row,
    SimpleOrmError,
    SqlPort,
    UniquenessError,
    bind_params,
    classify,
)
from .ports import (
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
from .utils.logging import configure_logging, get_logger

__all__ = [
    "BoundParams",
    "ConnectionProvider",
    "Credentials",
    "Dialect",
    "ErrorKind",
    "Executor",
    "MySQLDialect",
    "OrmError",
    "ParamType",
    "PoolConnector",
    "PostgresDialect",
    "Row",
    "SQLiteDialect",
    "SimpleOrmError",
    "SqlPort",
    "UniquenessError",
    "WriteResult",
    "bind_params",
    "classify",
    "configure_logging",
    "connect",
    "get_logger",
]
