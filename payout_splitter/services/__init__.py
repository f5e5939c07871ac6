"""Split engine services and run orchestration."""

from .errors import EmptyInputError, HeaderNotFoundError, SplitError
from .splitter import SplitResult, split_sheet

__all__ = [
    "EmptyInputError",
    "HeaderNotFoundError",
    "SplitError",
    "SplitResult",
    "split_sheet",
]
