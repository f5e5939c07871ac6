from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""Warning models.

CellWarning is produced by the engine for cells that degraded to 0 / empty
during normalization. It carries no timestamp so engine output stays a pure
function of its input.

WarningRecord is the JSON Lines row written to logs/warnings-*.log. It adds
the wall-clock timestamp, file and sheet. row=-1 marks file-level entries
(unreadable workbook, header not found).
"""

__all__ = [
    "CellWarning",
    "WarningRecord",
]


@dataclass(frozen=True)
class CellWarning:
    row_number: int  # 0-based data row (header excluded)
    field: str  # Logical field, e.g. complete_incentive
    value: str  # Trimmed cell text
    warning_type: str  # UPPER_SNAKE

    def describe(self) -> str:
        return f"{self.field}={self.value!r}"


@dataclass(frozen=True)
class WarningRecord:
    """Structured warning record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: workbook file name
        sheet: sheet name, "<FILE_LEVEL>" when not known
        row: 1-based worksheet row, -1 for file-level entries
        warning_type: classification in UPPER_SNAKE_CASE
        message: human readable detail
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    warning_type: str
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, warning_type: str, message: str) -> WarningRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return WarningRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            warning_type=warning_type,
            message=message,
        )

    @staticmethod
    def from_cell_warning(file: str, sheet: str, header_row_index: int, warning: CellWarning) -> WarningRecord:
        # header row index is 0-based; data rows start right below it, worksheet rows are 1-based
        sheet_row = header_row_index + 2 + warning.row_number
        return WarningRecord.create(file, sheet, sheet_row, warning.warning_type, warning.describe())

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
