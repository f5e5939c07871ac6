from __future__ import annotations

import pytest

from payout_splitter.models.config_models import HeaderSpec
from payout_splitter.services.errors import HeaderNotFoundError
from payout_splitter.services.header_resolver import HEADER_SCAN_LIMIT, resolve_header


def test_header_found_after_preamble():
    rows = [
        ["Survey export 2024 Q3"],
        ["Project: retail tracking", "Wave 2"],
        [],
        ["Response ID", "src - source", "Status", "db.mobile", "complete incentive"],
        ["R1", "", "Complete", "0901111111", "30000"],
    ]
    match = resolve_header(rows, HeaderSpec())
    assert match.row_index == 3
    cmap = match.column_map
    assert cmap.index_of("response_id") == 0
    assert cmap.index_of("src") == 1
    assert cmap.index_of("status") == 2
    assert cmap.index_of("db_mobile") == 3
    assert cmap.index_of("complete_incentive") == 4
    assert not cmap.has("pprid")


def test_header_tolerates_label_variants():
    rows = [["SRC (source)", "Response-ID #", "Notes"]]
    match = resolve_header(rows, HeaderSpec())
    assert match.column_map.index_of("src") == 0
    assert match.column_map.index_of("response_id") == 1


def test_earliest_qualifying_row_wins():
    rows = [
        ["Response ID", "Status"],
        ["Response ID", "src - source", "Status", "db.mobile", "complete incentive"],
    ]
    match = resolve_header(rows, HeaderSpec())
    assert match.row_index == 0
    assert len(match.column_map) == 2


def test_single_match_is_not_enough():
    rows = [["Response ID", "something else"], ["x", "y"]]
    with pytest.raises(HeaderNotFoundError) as e:
        resolve_header(rows, HeaderSpec())
    assert "Response ID" in str(e.value)
    assert "src - source" in str(e.value)


def test_blank_labels_never_match():
    headers = HeaderSpec(
        src="",
        response_id="---",
        db_mobile="",
        complete_incentive="",
        pprid="",
        ref="",
        referral_incentive="",
        status="Status",
    )
    rows = [["anything", "Status"], ["", "Status", "db.mobile", "---"]]
    # only status has a usable label, so no row reaches two matches
    with pytest.raises(HeaderNotFoundError) as e:
        resolve_header(rows, headers)
    assert e.value.labels == ["---", "Status"]


def test_header_beyond_scan_window_is_not_found():
    rows = [["filler"] for _ in range(HEADER_SCAN_LIMIT)]
    rows.append(["Response ID", "src - source", "Status"])
    with pytest.raises(HeaderNotFoundError) as e:
        resolve_header(rows, HeaderSpec())
    assert e.value.scanned_rows == HEADER_SCAN_LIMIT


def test_empty_cells_do_not_match_labels():
    rows = [["", "", "Status", ""], ["", "src - source", "Status"]]
    match = resolve_header(rows, HeaderSpec())
    assert match.row_index == 1
