from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import WorkbookReadError, read_sheet_matrix
from ..logging.init import log_summary, setup_logging
from ..models.config_models import AppConfig
from ..services.errors import SplitError
from ..services.header_resolver import HEADER_SCAN_LIMIT, resolve_header
from ..services.orchestrator import ProcessingError, process_all, scan_excel_files
from ..services.summary import render_summary_line

"""CLI entrypoint (``python -m payout_splitter.cli``).

Flow:
- Load .env, then the YAML config
- Collect inputs (positional files or .xlsx files in source_directory)
- Split each workbook, write one zip archive per workbook to output_directory
- Print the SUMMARY line and exit with a contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path) -> None:
    """Load .env with python-dotenv; existing environment variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="payout-splitter", description="Split a survey export into payout files")
    p.add_argument("files", nargs="*", type=Path, help="Workbooks to split (default: all .xlsx in source_directory)")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Split and report without writing archives")
    p.add_argument("--inspect", action="store_true", help="Print detected header row & column map then exit")
    return p.parse_args(argv)


def _inspect(files: list[Path], cfg: AppConfig) -> int:
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheet, rows = read_sheet_matrix(f, cfg.sheet_name)
            match = resolve_header(rows[:HEADER_SCAN_LIMIT], cfg.split.headers)
        except (WorkbookReadError, SplitError) as e:
            print(f"  error={e}")
            continue
        print(f"  SHEET: {sheet} header_row={match.row_index + 1}")
        for name, idx in match.column_map.indices.items():
            print(f"    {name} -> column {idx + 1} ({rows[match.row_index][idx]!r})")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when argv is None; an explicit [] means "no arguments".
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        files = list(args.files) if args.files else scan_excel_files(Path(cfg.source_directory))
    except ProcessingError as e:
        logger.error(f"{e}")
        return EXIT_FATAL

    missing = [f for f in files if not f.exists()]
    if missing:
        logger.error(f"input not found: {', '.join(str(m) for m in missing)}")
        return EXIT_FATAL

    if args.inspect:
        return _inspect(files, cfg)

    logger.info(f"Splitting {len(files)} file(s) project_code={cfg.split.project_code or '-'}")
    result = process_all(cfg, files, dry_run=args.dry_run)

    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
