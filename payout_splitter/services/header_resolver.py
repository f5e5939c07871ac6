from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.column_map import ColumnMap
from ..models.config_models import HeaderSpec
from .errors import HeaderNotFoundError
from .normalizers import normalize_label

"""Header row detection.

Survey exports often carry a few preamble rows (title, filters, notes) above
the real header, so the header row is searched for instead of assumed.

Matching is deliberately loose: after normalization a cell matches a label
when either contains the other, which tolerates punctuation changes and
parenthetical notes in the header text. The earliest row that matches
MATCH_THRESHOLD fields wins, not the best-scoring row.
"""

__all__ = [
    "HEADER_SCAN_LIMIT",
    "MATCH_THRESHOLD",
    "HeaderMatch",
    "resolve_header",
]

logger = logging.getLogger(__name__)

HEADER_SCAN_LIMIT = 20
MATCH_THRESHOLD = 2


@dataclass(frozen=True)
class HeaderMatch:
    row_index: int  # 0-based index of the header row in the sheet
    column_map: ColumnMap


def _label_matches(cell: str, target: str) -> bool:
    return bool(cell) and (cell == target or target in cell or cell in target)


def _match_row(cells: Sequence[str], targets: list[tuple[str, str]]) -> dict[str, int]:
    found: dict[str, int] = {}
    for name, target in targets:
        for idx, cell in enumerate(cells):
            if _label_matches(cell, target):
                found[name] = idx
                break
    return found


def resolve_header(rows: Sequence[Sequence[object]], headers: HeaderSpec) -> HeaderMatch:
    """Locate the header row among the first HEADER_SCAN_LIMIT rows.

    Fields whose label normalizes to "" are never matched. Fields are
    evaluated in configuration order and each takes the first matching cell,
    so two fields with overlapping labels may share a column.

    Raises:
        HeaderNotFoundError: no scanned row reaches MATCH_THRESHOLD fields.
    """
    targets = [(name, normalize_label(label)) for name, label in headers.items()]
    targets = [(name, t) for name, t in targets if t]

    window = min(HEADER_SCAN_LIMIT, len(rows))
    for r in range(window):
        cells = [normalize_label(c) for c in rows[r]]
        found = _match_row(cells, targets)
        if len(found) >= MATCH_THRESHOLD:
            logger.debug("header row %d matched fields %s", r, sorted(found))
            return HeaderMatch(row_index=r, column_map=ColumnMap(found))

    raise HeaderNotFoundError(headers.labels(), window)
