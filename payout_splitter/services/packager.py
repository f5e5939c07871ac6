from __future__ import annotations

import io
import re
import zipfile
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

import pandas as pd

from ..models.artifact import ArtifactKind, ExportArtifact

"""Artifact packaging.

Writes the artifacts of one split into a zip archive. Tabular artifacts
become single-sheet workbooks (sheet ``Sheet1``, header row then data rows);
text and csv artifacts are stored as their payload bytes.

Archives are byte-identical for identical input: outer and workbook zip
entries carry a fixed date, and the workbook created/modified properties are
pinned to the same instant.
"""

__all__ = [
    "archive_name",
    "workbook_bytes",
    "artifact_bytes",
    "write_archive",
]

_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
_DOC_EPOCH = datetime(*_ZIP_EPOCH)
_CORE_PROPS = "docProps/core.xml"
# openpyxl may stamp modified at save time, whatever the workbook properties say
_CORE_DATES = re.compile(rb"(<dcterms:(?:created|modified)\b[^>]*>)[^<]*(</dcterms:)")


def archive_name(project_code: str, input_stem: str | None = None) -> str:
    """``processed_files_{code or 'export'}[-{input stem}].zip``"""
    base = f"processed_files_{(project_code or '').strip() or 'export'}"
    if input_stem:
        base += f"-{input_stem}"
    return base + ".zip"


def _entry(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=_ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    return info


def _repack_workbook(data: bytes) -> bytes:
    stamp = _DOC_EPOCH.strftime("%Y-%m-%dT%H:%M:%SZ").encode()
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(data)) as src, zipfile.ZipFile(out, "w") as dst:
        for item in src.infolist():
            payload = src.read(item.filename)
            if item.filename == _CORE_PROPS:
                payload = _CORE_DATES.sub(rb"\g<1>" + stamp + rb"\g<2>", payload)
            dst.writestr(_entry(item.filename), payload)
    return out.getvalue()


def workbook_bytes(artifact: ExportArtifact) -> bytes:
    df = pd.DataFrame(list(artifact.rows), columns=list(artifact.header))
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Sheet1", index=False)
        writer.book.properties.created = _DOC_EPOCH
        writer.book.properties.modified = _DOC_EPOCH
    return _repack_workbook(buf.getvalue())


def artifact_bytes(artifact: ExportArtifact) -> bytes:
    if artifact.kind is ArtifactKind.TABULAR:
        return workbook_bytes(artifact)
    return artifact.to_bytes()


def write_archive(path: Path, artifacts: Iterable[ExportArtifact]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for artifact in artifacts:
            zf.writestr(_entry(artifact.file_name), artifact_bytes(artifact))
    return path
