from __future__ import annotations

import re
from datetime import datetime, timezone

from payout_splitter.models.run_result import RunResult
from payout_splitter.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=([0-9]+)/(\1) success=([0-9]+) failed=([0-9]+) "
    r"complete=([0-9]+) artifacts=([0-9]+) elapsed_sec=([0-9]+\.?[0-9]*)$"
)

T0 = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def _result(success, failed, complete, artifacts, elapsed):
    return RunResult(success, failed, complete, artifacts, T0, T0, elapsed)


def test_render_summary_all_success():
    line = render_summary_line(_result(2, 0, 120, 9, 2.0))
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.groups() == ("2", "2", "2", "0", "120", "9", "2")


def test_render_summary_partial_failure():
    line = render_summary_line(_result(1, 2, 10, 3, 1.23456))
    assert line == "SUMMARY files=3/3 success=1 failed=2 complete=10 artifacts=3 elapsed_sec=1.235"


def test_render_summary_tiny_elapsed():
    line = render_summary_line(_result(0, 0, 0, 0, 0.0001234))
    assert line.endswith("elapsed_sec=0.000123")
    assert SUMMARY_PATTERN.match(line)
