"""Builds the SET clause of a partial UPDATE.

Callers pass an ordered mapping of column -> value together with the
hardcoded allow-list for their table. Values equal to ``UNSET`` are
skipped; ``None`` is kept and binds SQL NULL. Column names are only ever
taken from the allow-list, never from request input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final


class _Unset:
    """Marker for "field absent from the request"."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass(frozen=True)
class UpdateSet:
    """Columns and bound values for ``UPDATE ... SET <clause>``."""

    columns: tuple[str, ...] = ()
    values: tuple[Any, ...] = ()
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def clause(self) -> str:
        return ", ".join(f"{column} = :{column}" for column in self.columns)

    def __bool__(self) -> bool:
        return bool(self.columns)

    def __len__(self) -> int:
        return len(self.columns)


def build_update(
    candidates: Mapping[str, Any] | Iterable[tuple[str, Any]],
    allowed_columns: frozenset[str],
) -> UpdateSet:
    """Return the UpdateSet for every candidate that is not ``UNSET``.

    Raises:
        ValueError: A candidate column is not in ``allowed_columns``, or
            appears more than once.
    """
    items = candidates.items() if isinstance(candidates, Mapping) else candidates

    columns: list[str] = []
    values: list[Any] = []
    for column, value in items:
        if column not in allowed_columns:
            raise ValueError(f"Column {column!r} is not updatable")
        if value is UNSET:
            continue
        if column in columns:
            raise ValueError(f"Column {column!r} given twice")
        columns.append(column)
        values.append(value)

    return UpdateSet(
        columns=tuple(columns),
        values=tuple(values),
        params=dict(zip(columns, values, strict=True)),
    )
