# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

SURVEY_HEADER = [
    "Response ID",
    "src - source",
    "Status",
    "db.mobile",
    "complete incentive",
    "pprid - panel provider's respondent id",
    "ref - referrer",
    "referral incentive",
]


def survey_row(
    rid: str = "",
    src: str = "",
    status: str = "Complete",
    mobile: str = "",
    inc: str = "",
    pprid: str = "",
    ref: str = "",
    ref_inc: str = "",
) -> list[str]:
    return [rid, src, status, mobile, inc, pprid, ref, ref_inc]


@pytest.fixture()
def make_row():
    return survey_row


@pytest.fixture()
def make_sheet():
    """Build a sheet matrix: optional preamble rows, the header, then data rows."""
    def _make(rows: list[list[str]], preamble: list[list[str]] | None = None) -> list[list[str]]:
        return [*(preamble or []), list(SURVEY_HEADER), *rows]
    return _make


@pytest.fixture()
def end_to_end_rows() -> list[list[str]]:
    return [
        survey_row(rid="R1", src="", mobile="0901111111", inc="30000"),
        survey_row(rid="R2", src="referral", ref="0902222222", ref_inc="10000"),
        survey_row(rid="R3", src="referral", ref="0902222222", ref_inc="15000"),
        survey_row(rid="R4", src="pp_fulcrum", pprid="F001"),
    ]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PAYOUT_PROJECT_CODE", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
project_code: P01
vendor_cpis:
  pp_fulcrum: 1.5
  pp_lucid: 0
headers:
  status: Status
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "split.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_workbook():
    """Write sheets (name -> matrix) to an .xlsx file without pandas headers."""
    def _write(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
        return path
    return _write
