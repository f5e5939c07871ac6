from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering."""


def _format_seconds(value: float) -> str:
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very short runs
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the run SUMMARY line.

    Format:
    SUMMARY files={total}/{total} success={n} failed={n} complete={n} artifacts={n} elapsed_sec={s}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(RunResult(1, 0, 42, 5, t, t, 2.0))
        'SUMMARY files=1/1 success=1 failed=0 complete=42 artifacts=5 elapsed_sec=2'
    """
    total = result.success_files + result.failed_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"complete={result.total_complete} "
        f"artifacts={result.total_artifacts} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
