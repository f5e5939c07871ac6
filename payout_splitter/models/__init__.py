"""Domain models for the survey payout splitter.

Configuration, classification, artifact and statistics models shared by the
engine services and the CLI.
"""

from .artifact import ArtifactKind, ExportArtifact
from .classified_row import ClassifiedRow, DisqualifiedRecord, RowOutcome
from .column_map import ColumnMap
from .config_models import HEADER_FIELDS, AppConfig, HeaderSpec, SplitConfig
from .preview_stats import PreviewStats
from .run_result import FileStat, FileStatus, RunResult
from .warning_record import CellWarning, WarningRecord

__all__ = [
    # Configuration models
    "HEADER_FIELDS",
    "AppConfig",
    "HeaderSpec",
    "SplitConfig",
    # Engine models
    "ColumnMap",
    "RowOutcome",
    "ClassifiedRow",
    "DisqualifiedRecord",
    "ArtifactKind",
    "ExportArtifact",
    "PreviewStats",
    "CellWarning",
    # Run models
    "WarningRecord",
    "FileStat",
    "FileStatus",
    "RunResult",
]
