from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce

from ..models.artifact import ExportArtifact
from ..models.classified_row import DisqualifiedRecord, RowOutcome
from ..models.column_map import ColumnMap
from ..models.config_models import SplitConfig
from ..models.preview_stats import PreviewStats
from ..models.warning_record import CellWarning
from .accumulator import SplitAccumulator
from .aggregator import compute_vendor_costs
from .errors import EmptyInputError
from .export_planner import plan_exports
from .header_resolver import HEADER_SCAN_LIMIT, resolve_header
from .row_classifier import classify_row, find_cell_warnings
from .stats import build_preview_stats

"""Split engine entry point.

split_sheet() is a pure function of (rows, config): header detection, row
classification, aggregation, export planning and statistics in one
synchronous pass. It performs no I/O; reading workbooks and writing archives
belong to payout_splitter.excel.reader and payout_splitter.services.packager.
"""

__all__ = [
    "SplitResult",
    "split_sheet",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitResult:
    header_row_index: int
    column_map: ColumnMap
    artifacts: tuple[ExportArtifact, ...]
    report: tuple[str, ...]
    stats: PreviewStats
    disqualified: tuple[DisqualifiedRecord, ...]
    outcome_counts: dict[RowOutcome, int]
    warnings: tuple[CellWarning, ...] = ()

    @property
    def data_rows(self) -> int:
        return sum(self.outcome_counts.values())


def split_sheet(rows: Sequence[Sequence[object]], config: SplitConfig) -> SplitResult:
    """Run the whole split over one sheet matrix.

    Raises:
        EmptyInputError: the sheet has no rows
        HeaderNotFoundError: no header row within the first 20 rows
    """
    if not rows:
        raise EmptyInputError()

    header = resolve_header(rows[:HEADER_SCAN_LIMIT], config.headers)
    cmap = header.column_map

    classified = [classify_row(i, row, cmap) for i, row in enumerate(rows[header.row_index + 1:])]
    grouped = reduce(SplitAccumulator.add, classified, SplitAccumulator()).finish()
    warnings = tuple(w for row in classified for w in find_cell_warnings(row, cmap))

    vendor_costs = compute_vendor_costs(grouped.counts_by_src, config.vendor_cpis)
    plan = plan_exports(grouped, cmap, config)
    stats = build_preview_stats(grouped, vendor_costs)

    logger.debug(
        "split header_row=%d outcomes=%s artifacts=%d",
        header.row_index,
        {o.value: n for o, n in grouped.outcome_counts.items()},
        len(plan.artifacts),
    )
    return SplitResult(
        header_row_index=header.row_index,
        column_map=cmap,
        artifacts=plan.artifacts,
        report=plan.report,
        stats=stats,
        disqualified=grouped.disqualified,
        outcome_counts=grouped.outcome_counts,
        warnings=warnings,
    )
