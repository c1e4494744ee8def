"""Materialized result rows addressable by column name and by index."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple, Union, overload


class Row(Mapping[str, Any]):
    """Read-only result row.

    ``row["email"]`` and ``row[1]`` read the same stored value. Iteration
    follows mapping semantics and yields column names.
    """

    __slots__ = ("_columns", "_index", "_values")

    def __init__(self, columns: Sequence[str], values: Sequence[Any]):
        if len(columns) != len(values):
            raise ValueError(
                f"Row has {len(values)} values for {len(columns)} columns."
            )
        self._columns: Tuple[str, ...] = tuple(columns)
        self._values: Tuple[Any, ...] = tuple(values)
        index: Dict[str, int] = {}
        for position, name in enumerate(self._columns):
            # Duplicate names resolve to the last column, like a dict build.
            index[name] = position
        self._index = index

    @overload
    def __getitem__(self, key: int) -> Any: ...

    @overload
    def __getitem__(self, key: str) -> Any: ...

    def __getitem__(self, key: Union[int, str]) -> Any:
        if isinstance(key, bool):
            raise KeyError(key)
        if isinstance(key, int):
            try:
                return self._values[key]
            except IndexError:
                raise IndexError(f"Row index out of range: {key}") from None
        return self._values[self._index[key]]

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._columns == other._columns and self._values == other._values
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash((self._columns, self._values))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k}={v!r}" for k, v in zip(self._columns, self._values))
        return f"Row({pairs})"

    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    def as_tuple(self) -> Tuple[Any, ...]:
        return self._values

    def as_dict(self) -> Dict[str, Any]:
        return {name: self._values[pos] for name, pos in self._index.items()}


def rows_from_cursor(cursor: Any, raw_rows: Sequence[Any]) -> list[Row]:
    """Build ``Row`` objects from DB-API rows and ``cursor.description``.

    Mapping rows (dict cursors, ``sqlite3.Row``) keep their own key order.
    """

    desc = getattr(cursor, "description", None)
    if not desc:
        raise TypeError("Cursor has no description; cannot name row columns.")
    cols = [d[0] for d in desc]

    rows: list[Row] = []
    for raw in raw_rows:
        if isinstance(raw, Mapping):
            rows.append(Row(list(raw.keys()), list(raw.values())))
        elif hasattr(raw, "keys") and not isinstance(raw, (tuple, list)):
            keys = list(raw.keys())
            rows.append(Row(keys, [raw[k] for k in keys]))
        else:
            rows.append(Row(cols, raw))
    return rows
