from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Row classification outcome models.

Every data row below the header ends up in exactly one RowOutcome. The
outcome is an explicit tag so the partition over all rows can be counted
directly instead of being inferred from which counters moved.
"""

__all__ = [
    "RowOutcome",
    "DisqualifiedRecord",
    "ClassifiedRow",
]


class RowOutcome(Enum):
    """Disjoint classification of a data row.

    - SKIPPED_BLANK: every cell empty after trimming
    - DISQUALIFIED: pp_fulcrum row with status "disqualified"
    - INCOMPLETE: status column present and not complete/completed
    - COUNTED: complete row, grouped under its source key
    """
    SKIPPED_BLANK = "skipped-blank"
    DISQUALIFIED = "disqualified"
    INCOMPLETE = "incomplete"
    COUNTED = "counted"


@dataclass(frozen=True)
class DisqualifiedRecord:
    """Report row for a disqualified pp_fulcrum respondent; cell text, trimmed."""
    pprid: str
    response_id: str
    status: str

    def as_row(self) -> tuple[str, str, str]:
        return (self.pprid, self.response_id, self.status)


@dataclass(frozen=True)
class ClassifiedRow:
    """A data row with its canonical source key and outcome.

    row_number is the 0-based position among data rows (header excluded).
    incentive is the parsed VND amount credited to the source group; it is
    only meaningful for COUNTED rows.
    """
    row_number: int
    cells: tuple[str, ...]
    source_key: str
    outcome: RowOutcome
    incentive: int = 0
    disqualified: DisqualifiedRecord | None = None
