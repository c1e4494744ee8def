"""Positional parameter type inference and binding."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from .types import QueryParams


class ParamType(str, Enum):
    """Wire type of one positional parameter, valued by its bind tag."""

    INTEGER = "i"
    FLOAT = "d"
    TEXT = "s"

    @property
    def tag(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoundParams:
    """Aligned parameter type tags and coerced values, in placeholder order."""

    types: str
    values: Tuple[Any, ...]

    def __post_init__(self) -> None:
        if len(self.types) != len(self.values):
            raise ValueError("types and values must have the same length.")

    def __len__(self) -> int:
        return len(self.values)

    @property
    def param_types(self) -> Tuple[ParamType, ...]:
        return tuple(ParamType(tag) for tag in self.types)


def classify(value: Any) -> ParamType:
    """Infer the parameter type of one runtime value.

    First match wins: ``bool`` is text, ``int`` is integer, ``float`` is
    float, and everything else (``None`` included) is text.
    """

    if isinstance(value, bool):
        return ParamType.TEXT
    if isinstance(value, int):
        return ParamType.INTEGER
    if isinstance(value, float):
        return ParamType.FLOAT
    return ParamType.TEXT


def coerce(value: Any, param_type: ParamType) -> Any:
    """Convert a value to the Python type the driver sends for ``param_type``.

    ``None`` and ``bytes`` are passed through unchanged as text: the driver
    sends SQL ``NULL`` and a binary string respectively.
    """

    if param_type is ParamType.INTEGER:
        return int(value)
    if param_type is ParamType.FLOAT:
        return float(value)
    if value is None or isinstance(value, (bytes, bytearray)):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def bind_params(params: QueryParams) -> Optional[BoundParams]:
    """Classify and coerce a positional parameter list.

    Args:
        params: Untyped values in placeholder order.

    Returns:
        ``BoundParams`` with one tag and one value per parameter, or ``None``
        when there is nothing to bind.
    """

    if params is None:
        return None

    # Mappings and sets have no placeholder order; strings would bind per char.
    if not isinstance(params, Sequence) or isinstance(params, (str, bytes, bytearray)):
        raise TypeError(
            f"params must be a sequence of values, got {type(params).__name__}."
        )
    if not params:
        return None

    tags = []
    values = []
    for value in params:
        param_type = classify(value)
        tags.append(param_type.tag)
        values.append(coerce(value, param_type))
    return BoundParams(types="".join(tags), values=tuple(values))
