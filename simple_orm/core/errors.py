"""Error taxonomy raised by the query executor.

Two kinds exist and the set is closed. Every error carries ``kind`` so
callers can branch with ``match err.kind`` instead of parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    GENERIC = "generic"
    UNIQUE_VIOLATION = "unique_violation"


class SimpleOrmError(Exception):
    """Base class for every error raised by the executor."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or ""
        super().__init__(self.message)

    def __repr__(self) -> str:
        if self.message:
            return f"{self.__class__.__name__}({self.message!r})"
        return f"{self.__class__.__name__}()"


class OrmError(SimpleOrmError):
    """Preparation, execution, or result retrieval failure.

    ``message`` holds the driver's diagnostic text when one was available.
    """

    kind = ErrorKind.GENERIC


class UniquenessError(SimpleOrmError):
    """A write was rejected by a unique constraint.

    Intentionally carries no message.
    """

    kind = ErrorKind.UNIQUE_VIOLATION

    def __init__(self) -> None:
        super().__init__(None)
