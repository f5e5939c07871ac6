from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from decimal import Decimal

"""Config dataclasses for the survey payout splitter.

These are the domain models handed to the split engine. The YAML loader in
payout_splitter/config/loader.py builds them; the engine never reads files.
"""

__all__ = [
    "HEADER_FIELDS",
    "HeaderSpec",
    "SplitConfig",
    "AppConfig",
]

# Logical field order. Header matching walks fields in this order.
HEADER_FIELDS: tuple[str, ...] = (
    "src",
    "response_id",
    "db_mobile",
    "complete_incentive",
    "pprid",
    "ref",
    "referral_incentive",
    "status",
)


@dataclass(frozen=True)
class HeaderSpec:
    """Logical field -> human header label as it appears in the workbook.

    Defaults match the column titles of the standard survey export.
    """
    src: str = "src - source"
    response_id: str = "Response ID"
    db_mobile: str = "db.mobile"
    complete_incentive: str = "complete incentive"
    pprid: str = "pprid - panel provider's respondent id"
    ref: str = "ref - referrer"
    referral_incentive: str = "referral incentive"
    status: str = "Status"

    def items(self) -> list[tuple[str, str]]:
        return [(name, getattr(self, name)) for name in HEADER_FIELDS]

    def labels(self) -> list[str]:
        return [label for _, label in self.items()]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str] | None) -> HeaderSpec:
        """Overlay a partial mapping on the default labels.

        Unknown keys raise ValueError so a typo in configuration does not
        silently fall back to a default label.
        """
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"unknown header fields: {unknown}")
        return cls(**{k: "" if v is None else str(v) for k, v in mapping.items()})


@dataclass(frozen=True)
class SplitConfig:
    """Per-run engine configuration.

    vendor_cpis maps a canonical source key (e.g. ``pp_lucid``) to its cost
    per interview in USD.
    """
    project_code: str = ""
    vendor_cpis: Mapping[str, Decimal] = field(default_factory=dict)
    headers: HeaderSpec = field(default_factory=HeaderSpec)

    def cpi_for(self, source_key: str) -> Decimal:
        return self.vendor_cpis.get(source_key, Decimal(0))


@dataclass(frozen=True)
class AppConfig:
    """Root configuration for a CLI run."""
    source_directory: str  # Directory scanned for .xlsx files
    output_directory: str  # Where archives are written
    sheet_name: str  # Preferred sheet, first sheet used when absent
    split: SplitConfig
