from __future__ import annotations
import json
from pathlib import Path

from payout_splitter.logging.warning_log import WarningLog
from payout_splitter.models.warning_record import CellWarning, WarningRecord

KEYS = {"timestamp", "file", "sheet", "row", "warning_type", "message"}


def test_warning_record_json_line():
    rec = WarningRecord.create("survey.xlsx", "Completed", 12, "MONEY_UNPARSABLE", "complete_incentive='free'")
    data = json.loads(rec.to_json_line())
    assert set(data) == KEYS
    assert data["row"] == 12
    assert data["timestamp"].endswith("Z")


def test_from_cell_warning_maps_to_sheet_row():
    # header on 0-based row 3 (sheet row 4), first data row is sheet row 5
    warning = CellWarning(row_number=0, field="ref", value="n/a", warning_type="PHONE_UNPARSABLE")
    rec = WarningRecord.from_cell_warning("s.xlsx", "Completed", 3, warning)
    assert rec.row == 5
    assert rec.message == "ref='n/a'"


def test_flush_writes_json_lines(temp_workdir: Path):
    buf = WarningLog()
    buf.extend([WarningRecord.create("a.xlsx", "S", 3, "MONEY_UNPARSABLE", "x")])
    buf.extend([WarningRecord.create("a.xlsx", "<FILE_LEVEL>", -1, "HEADER_NOT_FOUND", "y")])
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("logs")
    assert path.name.startswith("warnings-")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(set(json.loads(line)) == KEYS for line in lines)
    assert buf.flush() is None


def test_flush_empty_writes_nothing(tmp_path: Path):
    buf = WarningLog(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()
