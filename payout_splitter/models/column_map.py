from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

__all__ = [
    "ColumnMap",
]


@dataclass(frozen=True)
class ColumnMap:
    """Logical field name -> 0-based column index of the detected header row.

    Fields that were not matched are simply absent. Reading an absent field,
    or a column past the end of a short row, yields an empty string.
    """
    indices: Mapping[str, int] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.indices

    def index_of(self, name: str) -> int | None:
        return self.indices.get(name)

    def cell(self, row: Sequence[object], name: str) -> str:
        idx = self.indices.get(name)
        if idx is None or idx >= len(row):
            return ""
        value = row[idx]
        return "" if value is None else str(value)

    def __len__(self) -> int:
        return len(self.indices)
