from __future__ import annotations

import math
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

"""Excel reader.

Decodes one sheet of a workbook into a list of rows of cell strings, which is
all the split engine consumes. Formatting and formulas are ignored; cached
values are used as openpyxl returns them.

Sheet choice: the preferred sheet (``Completed`` by default) when the
workbook has one, otherwise the first sheet.
"""

__all__ = [
    "WorkbookReadError",
    "cell_to_text",
    "pick_sheet",
    "read_sheet_matrix",
]


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be opened or has no sheets."""
    error_type = "WORKBOOK_READ_ERROR"


def cell_to_text(value: Any) -> str:
    """Render a decoded cell the way it reads in the sheet.

    Empty / NaN -> "", integral floats -> integer text (30000.0 -> "30000")
    so money and phone cells stored as numbers survive normalization.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime) and value.time() == datetime.min.time():
        return value.date().isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def pick_sheet(sheet_names: list[str], preferred: str | None) -> str:
    if not sheet_names:
        raise WorkbookReadError("workbook has no sheets")
    if preferred and preferred in sheet_names:
        return preferred
    return sheet_names[0]


def read_sheet_matrix(path: Path, preferred_sheet: str | None = "Completed") -> tuple[str, list[list[str]]]:
    """Read one sheet as a string matrix.

    Returns:
        (sheet name, rows). An empty sheet yields an empty row list; deciding
        whether that is fatal is left to the engine.
    """
    try:
        xls = pd.ExcelFile(path, engine="openpyxl")
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path.name}: {e}") from e

    with xls:
        sheet = pick_sheet([str(n) for n in xls.sheet_names], preferred_sheet)
        # No header, no NA conversion: "NA" or "null" typed by a person stays text
        df = xls.parse(sheet, header=None, dtype=object, keep_default_na=False, na_filter=False)

    rows = [[cell_to_text(v) for v in raw] for raw in df.itertuples(index=False, name=None)]
    return sheet, rows
