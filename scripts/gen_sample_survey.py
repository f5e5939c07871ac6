#!/usr/bin/env python3
"""Generate a synthetic survey export workbook.

The layout mirrors a real export:
- A few preamble rows (title, project, blank)
- Header row with the standard column titles
- Data rows mixing blank-source, zalo, referral and panel-provider sources,
  with some incomplete and disqualified rows

Useful for trying the CLI and for timing larger inputs.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = [
    "Response ID",
    "src - source",
    "Status",
    "db.mobile",
    "complete incentive",
    "pprid - panel provider's respondent id",
    "ref - referrer",
    "referral incentive",
]

SOURCES = ["", "Zalo Group", "referral", "pp_fulcrum", "pp_lucid", "PP Pure Spectrum", "pp_cint"]
SOURCE_WEIGHTS = [0.30, 0.15, 0.15, 0.15, 0.10, 0.10, 0.05]
STATUSES = ["Complete", "Completed", "Disqualified", "Partial"]
STATUS_WEIGHTS = [0.70, 0.10, 0.10, 0.10]


def _phone(rng: np.random.Generator) -> str:
    return "09" + "".join(str(d) for d in rng.integers(0, 10, 8))


def generate_survey_rows(rows: int, seed: int = 42, referrers: int = 20) -> list[list[object]]:
    rng = np.random.default_rng(seed)
    referrer_pool = [_phone(rng) for _ in range(referrers)]
    out: list[list[object]] = []
    for i in range(rows):
        src = str(rng.choice(SOURCES, p=SOURCE_WEIGHTS))
        status = str(rng.choice(STATUSES, p=STATUS_WEIGHTS))
        row: list[object] = [f"R{i + 1:06d}", src, status, "", "", "", "", ""]
        key = src.lower()
        if key.startswith("pp"):
            row[5] = f"{key[:3].upper()}{rng.integers(100000, 999999)}"
        else:
            row[3] = _phone(rng)
            row[4] = int(rng.choice([20000, 30000, 50000]))
        if key == "referral":
            row[6] = str(rng.choice(referrer_pool))
            row[7] = int(rng.choice([10000, 15000, 20000]))
        out.append(row)
    return out


def create_survey_file(output_path: Path, rows: int, seed: int = 42, sheet: str = "Completed") -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheet_data: list[list[object]] = [
        ["Survey export"] + [""] * (len(HEADER) - 1),
        [f"rows={rows} seed={seed}"] + [""] * (len(HEADER) - 1),
        [""] * len(HEADER),
        HEADER,
        *generate_survey_rows(rows, seed),
    ]
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet_data).to_excel(writer, sheet_name=sheet, header=False, index=False)

    print(f"Created survey workbook: {output_path}")
    print(f"  Sheet: {sheet}")
    print(f"  Data rows: {rows} (header on row 4)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic survey export workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/sample.xlsx
  %(prog)s data/large.xlsx --rows 50000 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=500, help="Number of data rows (default: 500)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--sheet", default="Completed", help="Sheet name (default: Completed)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() != ".xlsx":
        print("Error: output file must have .xlsx extension", file=sys.stderr)
        return 1

    create_survey_file(args.output, args.rows, args.seed, args.sheet)
    return 0


if __name__ == "__main__":
    sys.exit(main())
