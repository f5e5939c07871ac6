from __future__ import annotations

from decimal import Decimal

from payout_splitter.models.column_map import ColumnMap
from payout_splitter.services.aggregator import aggregate_referrals, compute_vendor_costs

CMAP = ColumnMap({"ref": 0, "referral_incentive": 1})


def test_same_phone_collapses():
    rows = [("0902222222", "1000"), ("090-222-2222", "2000")]
    assert aggregate_referrals(rows, CMAP) == [("0902222222", 3000)]


def test_unparsable_and_blank_phones_dropped():
    rows = [("", ""), ("n/a", "5000"), ("", "7000"), ("0901", "abc")]
    assert aggregate_referrals(rows, CMAP) == [("0901", 0)]


def test_sorted_and_order_independent():
    rows = [("0909", "1"), ("0901", "2"), ("0905", "3"), ("0901", "4")]
    expected = [("0901", 6), ("0905", 3), ("0909", 1)]
    assert aggregate_referrals(rows, CMAP) == expected
    assert aggregate_referrals(list(reversed(rows)), CMAP) == expected


def test_vendor_cost_omits_zero_cpi_and_zero_count():
    counts = {"pp_lucid": 32, "pp_fulcrum": 10, "pp_cint": 0}
    cpis = {"pp_lucid": Decimal(0), "pp_fulcrum": Decimal("1.5"), "pp_cint": Decimal(2), "pp_toluna": Decimal(3)}
    costs = compute_vendor_costs(counts, cpis)
    assert costs == {"pp_fulcrum": Decimal("15.0")}
    assert "pp_lucid" not in costs


def test_vendor_cost_without_configured_cpi():
    assert compute_vendor_costs({"pp_lucid": 32}, {}) == {}
