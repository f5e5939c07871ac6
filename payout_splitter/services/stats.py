from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from ..models.preview_stats import PreviewStats
from .accumulator import GroupedRows

__all__ = [
    "build_preview_stats",
]


def build_preview_stats(grouped: GroupedRows, vendor_costs: Mapping[str, Decimal]) -> PreviewStats:
    """Project grouped rows into PreviewStats.

    Consumers get copies, never the grouped rows themselves.
    """
    return PreviewStats(
        total_complete=grouped.total_complete,
        total_evoucher_sum=grouped.total_evoucher_sum,
        total_referral_sum=grouped.total_referral_sum,
        counts_by_src=dict(grouped.counts_by_src),
        incentive_sum_by_src=dict(grouped.incentive_sum_by_src),
        vendor_costs=dict(vendor_costs),
    )
