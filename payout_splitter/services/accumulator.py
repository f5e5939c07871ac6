from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from ..models.classified_row import ClassifiedRow, DisqualifiedRecord, RowOutcome
from .normalizers import REFERRAL, ZALO_GROUP

"""Fold state for the classification pass.

SplitAccumulator is threaded through the row fold (``add`` returns the
accumulator) and frozen into GroupedRows once all rows are seen. Two
accumulators over consecutive chunks of a sheet can be combined with
``merge``; the result equals folding both chunks in order, which keeps group
discovery order and disqualified-record order intact.
"""

__all__ = [
    "GroupedRows",
    "SplitAccumulator",
]


@dataclass(frozen=True)
class GroupedRows:
    groups: dict[str, tuple[tuple[str, ...], ...]]  # Source key -> counted rows, discovery order
    counts_by_src: dict[str, int]
    incentive_sum_by_src: dict[str, int]
    total_complete: int
    total_evoucher_sum: int
    total_referral_sum: int
    disqualified: tuple[DisqualifiedRecord, ...]
    outcome_counts: dict[RowOutcome, int]

    def rows_for(self, source_key: str) -> tuple[tuple[str, ...], ...]:
        return self.groups.get(source_key, ())


class SplitAccumulator:
    def __init__(self) -> None:
        self.groups: dict[str, list[tuple[str, ...]]] = {}
        self.counts_by_src: dict[str, int] = {}
        self.incentive_sum_by_src: dict[str, int] = {}
        self.total_complete = 0
        self.total_evoucher_sum = 0
        self.total_referral_sum = 0
        self.disqualified: list[DisqualifiedRecord] = []
        self.outcome_counts: Counter[RowOutcome] = Counter()

    def add(self, row: ClassifiedRow) -> SplitAccumulator:
        self.outcome_counts[row.outcome] += 1
        if row.outcome is RowOutcome.DISQUALIFIED and row.disqualified is not None:
            self.disqualified.append(row.disqualified)
        if row.outcome is not RowOutcome.COUNTED:
            return self

        key = row.source_key
        self.groups.setdefault(key, []).append(row.cells)
        self.counts_by_src[key] = self.counts_by_src.get(key, 0) + 1
        self.incentive_sum_by_src[key] = self.incentive_sum_by_src.get(key, 0) + row.incentive
        self.total_complete += 1
        if key in ("", ZALO_GROUP):
            self.total_evoucher_sum += row.incentive
        elif key == REFERRAL:
            self.total_referral_sum += row.incentive
        return self

    def merge(self, other: SplitAccumulator) -> SplitAccumulator:
        """Combine with the accumulator of the following chunk."""
        merged = SplitAccumulator()
        for acc in (self, other):
            for key, rows in acc.groups.items():
                merged.groups.setdefault(key, []).extend(rows)
            for key, n in acc.counts_by_src.items():
                merged.counts_by_src[key] = merged.counts_by_src.get(key, 0) + n
            for key, amount in acc.incentive_sum_by_src.items():
                merged.incentive_sum_by_src[key] = merged.incentive_sum_by_src.get(key, 0) + amount
            merged.total_complete += acc.total_complete
            merged.total_evoucher_sum += acc.total_evoucher_sum
            merged.total_referral_sum += acc.total_referral_sum
            merged.disqualified.extend(acc.disqualified)
            merged.outcome_counts.update(acc.outcome_counts)
        return merged

    def finish(self) -> GroupedRows:
        return GroupedRows(
            groups={k: tuple(v) for k, v in self.groups.items()},
            counts_by_src=dict(self.counts_by_src),
            incentive_sum_by_src=dict(self.incentive_sum_by_src),
            total_complete=self.total_complete,
            total_evoucher_sum=self.total_evoucher_sum,
            total_referral_sum=self.total_referral_sum,
            disqualified=tuple(self.disqualified),
            outcome_counts={o: self.outcome_counts.get(o, 0) for o in RowOutcome},
        )
