"""Core port contracts used by the executor and its callers."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, List, Optional, Protocol, runtime_checkable

from .rows import Row
from .types import ErrorCode, QueryParams


class SqlPort(Protocol):
    """Parameterized SQL execution consumed by application code."""

    def insert(self, sql: str, params: QueryParams = None) -> int: ...

    def exec(self, sql: str, params: QueryParams = None) -> int: ...

    def select(self, sql: str, params: QueryParams = None) -> List[Row]: ...


@runtime_checkable
class ConnectionSource(Protocol):
    """Hands out one DB-API connection for the duration of a call."""

    def connection(self) -> AbstractContextManager[Any]: ...

    def close(self) -> None: ...


class DialectPort(Protocol):
    """Backend-specific behavior required by the executor."""

    name: str
    unique_violation_codes: frozenset

    def error_types(self, conn: Any) -> tuple[type[BaseException], ...]: ...

    def error_code(self, exc: BaseException) -> ErrorCode: ...

    def error_message(self, exc: BaseException) -> str: ...

    def is_unique_violation(self, exc: BaseException) -> bool: ...

    def get_lastrowid(self, cursor: Any) -> Optional[int]: ...

    def get_affected_rows(self, conn: Any, cursor: Any) -> int: ...
