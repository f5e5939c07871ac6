from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_sheet_matrix
from ..logging.warning_log import WarningLog
from ..models.config_models import AppConfig
from ..models.run_result import FileStat, FileStatus, RunResult
from ..models.warning_record import WarningRecord
from .errors import SplitError
from .packager import archive_name, write_archive
from .progress import ProgressTracker
from .splitter import SplitResult, split_sheet

"""Run orchestration.

Scans the source directory (or takes an explicit file list), splits each
workbook independently, packages its artifacts and aggregates the per-file
outcome into a RunResult. A failing file never stops the others: its error is
logged, recorded in the warnings log and counted as failed.
"""

__all__ = [
    "ProcessingError",
    "scan_excel_files",
    "process_file",
    "process_all",
]

logger = logging.getLogger(__name__)

FILE_LEVEL = "<FILE_LEVEL>"


class ProcessingError(Exception):
    """Fatal run-level error (missing source directory and the like)."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Sorted .xlsx files directly under directory, Excel lock files excluded."""
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _log_result(file_name: str, result: SplitResult) -> None:
    stats = result.stats
    logger.info(
        f"{file_name}: header_row={result.header_row_index + 1} complete={stats.total_complete} "
        f"evoucher_sum={stats.total_evoucher_sum} referral_sum={stats.total_referral_sum}"
    )
    for line in result.report:
        logger.info(line)
    for vendor, cost in stats.vendor_costs.items():
        logger.info(f"vendor cost {vendor}: {stats.counts_by_src.get(vendor, 0)} x CPI = ${cost}")
    if stats.vendor_costs:
        logger.info(f"total vendor cost: ${stats.grand_total_vendor_cost}")


def process_file(
    file_path: Path,
    config: AppConfig,
    warning_log: WarningLog,
    *,
    archive_path: Path | None = None,
) -> FileStat:
    """Split one workbook; archive_path=None means dry run (nothing written)."""
    start = datetime.now(UTC)
    sheet = FILE_LEVEL
    try:
        sheet, rows = read_sheet_matrix(file_path, config.sheet_name)
        result = split_sheet(rows, config.split)
    except (WorkbookReadError, SplitError) as e:
        logger.error(f"{file_path.name}: {e}")
        warning_log.extend([WarningRecord.create(file_path.name, sheet, -1, e.error_type, str(e))])
        elapsed = (datetime.now(UTC) - start).total_seconds()
        return FileStat(file_path.name, FileStatus.FAILED, 0, 0, elapsed, error=str(e))

    _log_result(file_path.name, result)
    if result.warnings:
        logger.warning(f"{file_path.name}: {len(result.warnings)} cell(s) could not be parsed, see warnings log")
        warning_log.extend(
            [WarningRecord.from_cell_warning(file_path.name, sheet, result.header_row_index, w) for w in result.warnings]
        )

    written: str | None = None
    if archive_path is not None:
        write_archive(archive_path, result.artifacts)
        written = str(archive_path)
        logger.info(f"archive written: {archive_path}")

    elapsed = (datetime.now(UTC) - start).total_seconds()
    return FileStat(
        file_name=file_path.name,
        status=FileStatus.SUCCESS,
        complete_rows=result.stats.total_complete,
        artifacts=len(result.artifacts),
        elapsed_seconds=elapsed,
        archive=written,
    )


def process_all(config: AppConfig, files: list[Path] | None = None, *, dry_run: bool = False) -> RunResult:
    """Split every input workbook.

    Args:
        config: loaded run configuration
        files: explicit inputs; None scans config.source_directory
        dry_run: split and report without writing archives

    Raises:
        ProcessingError: the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    warning_log = WarningLog()
    file_paths = files if files is not None else scan_excel_files(Path(config.source_directory))

    output_dir = Path(config.output_directory)
    project_code = config.split.project_code
    file_stats: list[FileStat] = []

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            archive_path = None
            if not dry_run:
                stem = file_path.stem if len(file_paths) > 1 else None
                archive_path = output_dir / archive_name(project_code, stem)
            stat = process_file(file_path, config, warning_log, archive_path=archive_path)
            file_stats.append(stat)
            progress.finish_file(complete=stat.complete_rows, artifacts=stat.artifacts)

    log_path = warning_log.flush()
    if log_path is not None:
        logger.info(f"warnings log: {log_path}")

    end_time = datetime.now(UTC)
    succeeded = [s for s in file_stats if s.status == FileStatus.SUCCESS]
    return RunResult(
        success_files=len(succeeded),
        failed_files=len(file_stats) - len(succeeded),
        total_complete=sum(s.complete_rows for s in succeeded),
        total_artifacts=sum(s.artifacts for s in succeeded),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
