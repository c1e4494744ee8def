"""Public core API for parameter binding, rows, and errors."""

from .contracts import ConnectionSource, DialectPort, SqlPort
from .errors import ErrorKind, OrmError, SimpleOrmError, UniquenessError
from .params import BoundParams, ParamType, bind_params, classify, coerce
from .rows import Row, rows_from_cursor

__all__ = [
    "BoundParams",
    "ConnectionSource",
    "DialectPort",
    "ErrorKind",
    "OrmError",
    "ParamType",
    "Row",
    "SimpleOrmError",
    "SqlPort",
    "UniquenessError",
    "bind_params",
    "classify",
    "coerce",
    "rows_from_cursor",
]
