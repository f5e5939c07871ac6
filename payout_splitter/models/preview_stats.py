from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

"""Summary statistics consumed by reporting / UI collaborators."""

__all__ = [
    "PreviewStats",
]


@dataclass(frozen=True)
class PreviewStats:
    """Counters derived from the grouped rows of one run.

    Money amounts are integer VND except vendor_costs, which is USD.
    """
    total_complete: int
    total_evoucher_sum: int  # Blank-source and zalogroup complete incentives
    total_referral_sum: int  # Referral incentives
    counts_by_src: dict[str, int]
    incentive_sum_by_src: dict[str, int]
    vendor_costs: dict[str, Decimal]  # Only vendors with count > 0 and CPI > 0

    @property
    def grand_total_vendor_cost(self) -> Decimal:
        return sum(self.vendor_costs.values(), Decimal(0))

    def to_dict(self) -> dict[str, Any]:
        """camelCase shape used by the dashboard."""
        return {
            "totalComplete": self.total_complete,
            "totalEvoucherSum": self.total_evoucher_sum,
            "totalReferralSum": self.total_referral_sum,
            "countsBySrc": dict(self.counts_by_src),
            "incentiveSumBySrc": dict(self.incentive_sum_by_src),
            "vendorCosts": {k: float(v) for k, v in self.vendor_costs.items()},
        }
