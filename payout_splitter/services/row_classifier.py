from __future__ import annotations

from collections.abc import Sequence

from ..models.classified_row import ClassifiedRow, DisqualifiedRecord, RowOutcome
from ..models.column_map import ColumnMap
from ..models.warning_record import CellWarning
from .normalizers import (
    EVOUCHER_SOURCES,
    FULCRUM,
    REFERRAL,
    has_digits,
    normalize_source_key,
    normalize_status,
    parse_money,
    trim,
)

"""Per-row classification.

Rules are applied in order; the first that fires decides the outcome:

1. blank row                                -> SKIPPED_BLANK
2. pp_fulcrum with status "disqualified"    -> DISQUALIFIED
3. status column present, not complete(d)   -> INCOMPLETE
4. otherwise                                -> COUNTED
"""

__all__ = [
    "COMPLETE_STATUSES",
    "incentive_field",
    "classify_row",
    "find_cell_warnings",
]

COMPLETE_STATUSES = frozenset({"complete", "completed"})
DISQUALIFIED_STATUS = "disqualified"


def incentive_field(source_key: str) -> str:
    """Column holding the amount credited to a source group."""
    return "referral_incentive" if source_key == REFERRAL else "complete_incentive"


def _is_complete(cells: Sequence[str], column_map: ColumnMap) -> bool:
    if not column_map.has("status"):
        return True
    return normalize_status(column_map.cell(cells, "status")) in COMPLETE_STATUSES


def classify_row(row_number: int, row: Sequence[object], column_map: ColumnMap) -> ClassifiedRow:
    cells = tuple("" if c is None else str(c) for c in row)
    if all(not trim(c) for c in cells):
        return ClassifiedRow(row_number, cells, "", RowOutcome.SKIPPED_BLANK)

    source_key = normalize_source_key(column_map.cell(cells, "src"))

    if (
        source_key == FULCRUM
        and column_map.has("status")
        and normalize_status(column_map.cell(cells, "status")) == DISQUALIFIED_STATUS
    ):
        record = DisqualifiedRecord(
            pprid=trim(column_map.cell(cells, "pprid")),
            response_id=trim(column_map.cell(cells, "response_id")),
            status=trim(column_map.cell(cells, "status")),
        )
        return ClassifiedRow(row_number, cells, source_key, RowOutcome.DISQUALIFIED, disqualified=record)

    if not _is_complete(cells, column_map):
        return ClassifiedRow(row_number, cells, source_key, RowOutcome.INCOMPLETE)

    incentive = parse_money(column_map.cell(cells, incentive_field(source_key)))
    return ClassifiedRow(row_number, cells, source_key, RowOutcome.COUNTED, incentive=incentive)


def find_cell_warnings(row: ClassifiedRow, column_map: ColumnMap) -> list[CellWarning]:
    """Report money / phone cells of a counted row that degrade silently.

    A non-blank cell without a single digit parses to 0 (money) or ""
    (phone). Processing is unaffected; the warnings only surface the loss.
    """
    if row.outcome is not RowOutcome.COUNTED:
        return []
    checks = [(incentive_field(row.source_key), "MONEY_UNPARSABLE")]
    if row.source_key in EVOUCHER_SOURCES:
        checks.append(("db_mobile", "PHONE_UNPARSABLE"))
    if row.source_key == REFERRAL:
        checks.append(("ref", "PHONE_UNPARSABLE"))

    warnings: list[CellWarning] = []
    for name, warning_type in checks:
        value = trim(column_map.cell(row.cells, name))
        if value and not has_digits(value):
            warnings.append(CellWarning(row.row_number, name, value, warning_type))
    return warnings
