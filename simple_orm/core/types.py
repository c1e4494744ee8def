"""Shared core type aliases used across contracts, executor, and ports."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

PositionalParams = Sequence[Any]
QueryParams = Optional[PositionalParams]

ErrorCode = Union[int, str, None]
