from __future__ import annotations

from functools import reduce

from payout_splitter.models.classified_row import RowOutcome
from payout_splitter.models.column_map import ColumnMap
from payout_splitter.services.accumulator import SplitAccumulator
from payout_splitter.services.row_classifier import classify_row

CMAP = ColumnMap({
    "response_id": 0,
    "src": 1,
    "status": 2,
    "db_mobile": 3,
    "complete_incentive": 4,
    "pprid": 5,
    "ref": 6,
    "referral_incentive": 7,
})


def _fold(rows):
    classified = [classify_row(i, r, CMAP) for i, r in enumerate(rows)]
    return reduce(SplitAccumulator.add, classified, SplitAccumulator())


def _mixed_rows(make_row):
    return [
        make_row(src="", mobile="0901", inc="30000"),
        make_row(src="pp_lucid", pprid="L1"),
        make_row(src="zalo group", mobile="0902", inc="20000"),
        make_row(src="pp_fulcrum", status="Disqualified", pprid="F1", rid="R4"),
        ["", "", "", "", "", "", "", ""],
        make_row(src="referral", ref="0903", ref_inc="10000"),
        make_row(src="pp_lucid", status="Partial", pprid="L2"),
        make_row(src="pp_fulcrum", status="Disqualified", pprid="F2", rid="R8"),
        make_row(src="pp_lucid", pprid="L3"),
    ]


def test_counters_and_partition(make_row):
    grouped = _fold(_mixed_rows(make_row)).finish()
    assert grouped.total_complete == 5
    assert grouped.total_complete == sum(grouped.counts_by_src.values())
    assert grouped.counts_by_src == {"": 1, "pp_lucid": 2, "zalogroup": 1, "referral": 1}
    assert grouped.total_evoucher_sum == 50000
    assert grouped.total_referral_sum == 10000
    assert grouped.incentive_sum_by_src == {"": 30000, "pp_lucid": 0, "zalogroup": 20000, "referral": 10000}
    assert grouped.outcome_counts == {
        RowOutcome.SKIPPED_BLANK: 1,
        RowOutcome.DISQUALIFIED: 2,
        RowOutcome.INCOMPLETE: 1,
        RowOutcome.COUNTED: 5,
    }
    assert sum(grouped.outcome_counts.values()) == 9
    assert [r.pprid for r in grouped.disqualified] == ["F1", "F2"]


def test_groups_keep_discovery_order(make_row):
    grouped = _fold(_mixed_rows(make_row)).finish()
    assert list(grouped.groups) == ["", "pp_lucid", "zalogroup", "referral"]
    assert [r[5] for r in grouped.rows_for("pp_lucid")] == ["L1", "L3"]
    assert grouped.rows_for("missing") == ()


def test_merge_of_chunks_equals_sequential_fold(make_row):
    rows = _mixed_rows(make_row)
    whole = _fold(rows).finish()
    for cut in range(len(rows) + 1):
        merged = _fold(rows[:cut]).merge(_fold(rows[cut:])).finish()
        assert merged == whole
