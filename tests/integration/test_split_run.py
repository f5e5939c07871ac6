from __future__ import annotations

import json
import time
import zipfile
from pathlib import Path

import pytest

from payout_splitter.cli import main as cli_main
from payout_splitter.config.loader import load_config
from payout_splitter.logging.init import reset_logging
from payout_splitter.services.orchestrator import process_all

"""End-to-end runs: workbook on disk -> CLI / orchestrator -> zip archive."""


@pytest.fixture
def survey_workbook(temp_workdir: Path, write_workbook, make_sheet, make_row, end_to_end_rows) -> Path:
    rows = [
        *end_to_end_rows,
        make_row(rid="R5", src="pp_fulcrum", status="Disqualified", pprid="F002"),
        make_row(rid="R6", src="zalo", mobile="0907777777", inc="free"),
        make_row(rid="R7", src="pp_lucid", status="Partial", pprid="L009"),
    ]
    sheet = make_sheet(rows, preamble=[["Survey export"], ["Wave 3"], []])
    return write_workbook(
        temp_workdir / "data" / "survey.xlsx",
        {"Raw": [["not this one"]], "Completed": sheet},
    )


def test_cli_run_writes_archive(write_config, survey_workbook: Path, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0

    archive = temp_workdir / "output" / "processed_files_P01.zip"
    assert archive.exists()
    with zipfile.ZipFile(archive) as zf:
        names = zf.namelist()
        assert names == [
            "P01-complete-topup-evoucher_gotit-2-30000.xlsx",
            "P01-referrer-1-25000.xlsx",
            "P01-pp_fulcrum-1-cpi1.5.xlsx",
            "P01-fulcrum_1-cpi1.5.txt",
            "Fulcrum_Disqualified.xlsx",
            "P01-evoucher_gotit-merged-3-55000.csv",
        ]
        assert zf.read("P01-fulcrum_1-cpi1.5.txt") == b"1"

    for name in names:
        assert name in out
    assert "INFO total vendor cost: $1.5" in out
    assert "WARN survey.xlsx: 1 cell(s) could not be parsed" in out
    assert "SUMMARY files=1/1 success=1 failed=0 complete=5 artifacts=6" in out

    logs = list((temp_workdir / "logs").glob("warnings-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert record["warning_type"] == "MONEY_UNPARSABLE"
    # preamble 3 rows + header on sheet row 4; R6 is the 6th data row
    assert record["row"] == 10


def test_partial_failure_keeps_going(write_config, survey_workbook: Path, temp_workdir: Path, write_workbook, capsys):
    reset_logging()
    write_workbook(temp_workdir / "data" / "no_header.xlsx", {"Completed": [["xyz", "qqq"], ["1", "2"]]})
    (temp_workdir / "data" / "empty.xlsx").write_bytes(b"")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "could not find header row" in out
    assert "SUMMARY files=3/3 success=1 failed=2" in out
    # several inputs -> archive names carry the input stem
    assert (temp_workdir / "output" / "processed_files_P01-survey.zip").exists()
    assert not (temp_workdir / "output" / "processed_files_P01-no_header.zip").exists()

    logs = list((temp_workdir / "logs").glob("warnings-*.log"))
    types = {json.loads(line)["warning_type"] for line in logs[0].read_text(encoding="utf-8").splitlines()}
    assert {"HEADER_NOT_FOUND", "WORKBOOK_READ_ERROR", "MONEY_UNPARSABLE"} <= types


def test_dry_run_writes_nothing(write_config, survey_workbook: Path, temp_workdir: Path):
    reset_logging()
    cfg = load_config(write_config)
    result = process_all(cfg, [survey_workbook], dry_run=True)
    assert result.success_files == 1
    assert result.total_complete == 5
    assert result.total_artifacts == 6
    assert result.file_stats[0].archive is None
    assert not (temp_workdir / "output").exists()


def test_runs_are_reproducible(write_config, survey_workbook: Path, temp_workdir: Path):
    reset_logging()
    cfg = load_config(write_config)
    first = process_all(cfg, [survey_workbook])
    archive = Path(first.file_stats[0].archive)
    first_bytes = archive.read_bytes()
    # second run lands in a later second; workbook payloads must not carry the clock
    time.sleep(1.1)
    second = process_all(cfg, [survey_workbook])
    assert second.file_stats[0].archive == str(archive)
    assert archive.read_bytes() == first_bytes
