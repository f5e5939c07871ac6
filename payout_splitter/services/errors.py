from __future__ import annotations

from collections.abc import Iterable

"""Fatal engine errors.

Both abort the whole split before any artifact is produced. Malformed cells
are not errors; see normalizers and CellWarning.
"""

__all__ = [
    "SplitError",
    "EmptyInputError",
    "HeaderNotFoundError",
]


class SplitError(Exception):
    """Base exception for split engine failures."""
    error_type = "SPLIT_ERROR"


class EmptyInputError(SplitError):
    """Raised when the decoded sheet has zero rows."""
    error_type = "EMPTY_INPUT"

    def __init__(self, message: str = "sheet is empty") -> None:
        super().__init__(message)


class HeaderNotFoundError(SplitError):
    """Raised when no scanned row matches enough configured header labels."""
    error_type = "HEADER_NOT_FOUND"

    def __init__(self, labels: Iterable[str], scanned_rows: int) -> None:
        self.labels = [label for label in labels if label]
        self.scanned_rows = scanned_rows
        searched = ", ".join(repr(label) for label in self.labels)
        super().__init__(
            f"could not find header row in first {scanned_rows} rows; "
            f"searched for: {searched}. Please check column names."
        )
