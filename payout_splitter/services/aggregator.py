from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal

from ..models.column_map import ColumnMap
from .normalizers import normalize_phone, parse_money, trim

"""Post-pass aggregations over the grouped rows."""

__all__ = [
    "aggregate_referrals",
    "compute_vendor_costs",
]


def aggregate_referrals(rows: Sequence[Sequence[str]], column_map: ColumnMap) -> list[tuple[str, int]]:
    """Sum referral incentives per referrer phone.

    Rows with neither referrer nor incentive, or whose referrer has no
    digits, are dropped. Output is sorted by phone key so it does not depend
    on row order.
    """
    totals: dict[str, int] = {}
    for row in rows:
        phone_raw = trim(column_map.cell(row, "ref"))
        incentive_raw = trim(column_map.cell(row, "referral_incentive"))
        if not phone_raw and not incentive_raw:
            continue
        phone = normalize_phone(phone_raw)
        if not phone:
            continue
        totals[phone] = totals.get(phone, 0) + parse_money(incentive_raw)
    return sorted(totals.items())


def compute_vendor_costs(counts_by_src: Mapping[str, int], vendor_cpis: Mapping[str, Decimal]) -> dict[str, Decimal]:
    """count * CPI for each configured vendor; vendors with no rows or no CPI are omitted."""
    costs: dict[str, Decimal] = {}
    for vendor, cpi in vendor_cpis.items():
        count = counts_by_src.get(vendor, 0)
        if count > 0 and cpi > 0:
            costs[vendor] = count * cpi
    return costs
