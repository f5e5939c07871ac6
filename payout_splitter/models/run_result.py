from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run result models aggregated by the orchestrator across input files."""

__all__ = [
    "FileStatus",
    "FileStat",
    "RunResult",
]


class FileStatus:
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome."""
    file_name: str
    status: str  # success/failed
    complete_rows: int  # totalComplete of the file
    artifacts: int  # number of artifacts generated
    elapsed_seconds: float
    archive: str | None = None  # written archive path, None in dry-run or on failure
    error: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated results and summary output for a CLI run."""
    success_files: int
    failed_files: int
    total_complete: int
    total_artifacts: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
