from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Export artifact model.

An ExportArtifact is a named payload handed to the packaging collaborator.
Names are derived from row counts and totals only, so two runs over the same
input produce the same names and payload bytes.
"""

__all__ = [
    "ArtifactKind",
    "ExportArtifact",
    "CSV_BOM",
]

CSV_BOM = "\ufeff"


class ArtifactKind(Enum):
    TABULAR = "tabular"
    TEXT = "text"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return {"tabular": ".xlsx", "text": ".txt", "csv": ".csv"}[self.value]


def _csv_field(value: object) -> str:
    s = "" if value is None else str(value)
    if any(ch in s for ch in (",", '"', "\n")):
        return '"' + s.replace('"', '""') + '"'
    return s


@dataclass(frozen=True)
class ExportArtifact:
    name: str  # Base name, project prefix already applied
    kind: ArtifactKind
    header: tuple[str, ...] = ()
    rows: tuple[tuple[object, ...], ...] = ()
    content: str = ""  # TEXT artifacts only
    total: int | None = field(default=None, compare=False)  # Monetary total embedded in the name, if any

    @property
    def file_name(self) -> str:
        return self.name + self.kind.extension

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def report_line(self) -> str:
        if self.kind is ArtifactKind.TABULAR:
            return f"Generated: {self.file_name} ({self.row_count} rows)"
        return f"Generated: {self.file_name}"

    def to_text(self) -> str:
        """Render TEXT and CSV payloads.

        CSV: header line then data lines joined by ``\\n`` with a leading
        byte-order mark; fields with a comma, quote or newline are quoted.
        """
        if self.kind is ArtifactKind.TEXT:
            return self.content
        if self.kind is ArtifactKind.CSV:
            lines = [",".join(_csv_field(c) for c in r) for r in (self.header, *self.rows)]
            return CSV_BOM + "\n".join(lines)
        raise ValueError(f"tabular artifact '{self.name}' has no text payload; write it as a workbook")

    def to_bytes(self) -> bytes:
        return self.to_text().encode("utf-8")
