from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.warning_record import WarningRecord

"""Run warnings log: one JSON Lines file per run, ``logs/warnings-YYYYMMDD-HHMMSS.log`` (UTC)."""

__all__ = [
    "WarningLog",
]

LOGS_DIR = Path("./logs")


class WarningLog:
    """Collects warning records during a run and writes them once at the end."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir or LOGS_DIR
        self._pending: list[WarningRecord] = []

    def extend(self, records: Iterable[WarningRecord]) -> None:
        self._pending.extend(records)

    def flush(self) -> Path | None:
        """Write pending records; None (and no file) when there are none."""
        if not self._pending:
            return None
        self._logs_dir.mkdir(parents=True, exist_ok=True)
        path = self._logs_dir / f"warnings-{datetime.now(UTC):%Y%m%d-%H%M%S}.log"
        with path.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._pending)
        self._pending.clear()
        return path
