from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..models.artifact import ArtifactKind, ExportArtifact
from ..models.column_map import ColumnMap
from ..models.config_models import SplitConfig
from .accumulator import GroupedRows
from .aggregator import aggregate_referrals
from .normalizers import EVOUCHER_SOURCES, FULCRUM, REFERRAL, normalize_phone, parse_money, trim

"""Export planning: grouped rows -> ordered, named artifacts.

Artifacts are always emitted in this order, each only when it has rows:

A  complete-topup-evoucher_gotit-{rows}-{total}   blank / zalogroup / referral top-ups
B  referrer-{phones}-{total}                      referral incentives per referrer phone
C  {source}-{rows}[-cpi{cpi}]                     respondent ids, one per vendor source
D  fulcrum_{rows}[-cpi{cpi}].txt                  pp_fulcrum complete count
E  Fulcrum_Disqualified                           disqualified pp_fulcrum rows
F  evoucher_gotit-merged-{rows}-{total}.csv       A and B merged for the voucher upload

Names carry counts and totals only, never times or random ids.
"""

__all__ = [
    "TOPUP_HEADER",
    "REFERRER_HEADER",
    "PPRID_HEADER",
    "DISQUALIFIED_HEADER",
    "MERGED_HEADER",
    "DISQUALIFIED_NAME",
    "ExportPlan",
    "add_project_prefix",
    "format_cpi",
    "plan_exports",
]

logger = logging.getLogger(__name__)

TOPUP_HEADER = ("db.mobile", "complete incentive")
REFERRER_HEADER = ("ref - referrer", "referral incentive")
PPRID_HEADER = ("pprid - panel provider's respondent id",)
DISQUALIFIED_HEADER = ("pprid - panel provider's respondent id", "Response ID", "Status")
MERGED_HEADER = ("mobile", "incentive", "incentive_type", "response_status")
DISQUALIFIED_NAME = "Fulcrum_Disqualified"

VOUCHER_TYPE = "Evoucher GOTIT"
QUALIFIED = "Qualified"
REFERRAL_SUCCESS = "Referral success"


@dataclass(frozen=True)
class ExportPlan:
    artifacts: tuple[ExportArtifact, ...]
    report: tuple[str, ...]


def add_project_prefix(project_code: str, base: str) -> str:
    code = (project_code or "").strip()
    return f"{code}-{base}" if code else base


def format_cpi(cpi: Decimal) -> str:
    """Shortest plain decimal form: 2 -> "2", 1.50 -> "1.5"."""
    return format(cpi.normalize(), "f")


def _cpi_suffix(source_key: str, config: SplitConfig) -> str:
    cpi = config.cpi_for(source_key)
    if source_key.startswith("pp_") and cpi != 0:
        return f"-cpi{format_cpi(cpi)}"
    return ""


def _evoucher_rows(grouped: GroupedRows) -> list[tuple[str, ...]]:
    rows: list[tuple[str, ...]] = []
    for key in EVOUCHER_SOURCES:
        rows.extend(grouped.rows_for(key))
    return rows


def _topup(rows: list[tuple[str, ...]], cmap: ColumnMap, config: SplitConfig) -> ExportArtifact:
    data: list[tuple[object, ...]] = []
    total = 0
    for row in rows:
        mobile = trim(cmap.cell(row, "db_mobile"))
        incentive = trim(cmap.cell(row, "complete_incentive"))
        if not mobile and not incentive:
            continue
        data.append((mobile, incentive))
        total += parse_money(incentive)
    base = f"complete-topup-evoucher_gotit-{len(data)}-{total}"
    return ExportArtifact(
        add_project_prefix(config.project_code, base),
        ArtifactKind.TABULAR,
        TOPUP_HEADER,
        tuple(data),
        total=total,
    )


def _referrer(referrals: list[tuple[str, int]], config: SplitConfig) -> ExportArtifact:
    total = sum(amount for _, amount in referrals)
    base = f"referrer-{len(referrals)}-{total}"
    return ExportArtifact(
        add_project_prefix(config.project_code, base),
        ArtifactKind.TABULAR,
        REFERRER_HEADER,
        tuple(referrals),
        total=total,
    )


def _vendor_ids(grouped: GroupedRows, cmap: ColumnMap, config: SplitConfig) -> list[ExportArtifact]:
    artifacts: list[ExportArtifact] = []
    for key, rows in grouped.groups.items():
        if key in EVOUCHER_SOURCES:
            continue
        ids = [(v,) for v in (trim(cmap.cell(r, "pprid")) for r in rows) if v]
        if not ids:
            logger.debug("source %r has no pprid values, skipped", key)
            continue
        base = f"{key}-{len(ids)}{_cpi_suffix(key, config)}"
        artifacts.append(
            ExportArtifact(add_project_prefix(config.project_code, base), ArtifactKind.TABULAR, PPRID_HEADER, tuple(ids))
        )
    return artifacts


def _fulcrum_marker(count: int, config: SplitConfig) -> ExportArtifact:
    base = f"fulcrum_{count}{_cpi_suffix(FULCRUM, config)}"
    return ExportArtifact(add_project_prefix(config.project_code, base), ArtifactKind.TEXT, content=str(count))


def _merged(
    rows: list[tuple[str, ...]], referrals: list[tuple[str, int]], cmap: ColumnMap, config: SplitConfig
) -> ExportArtifact | None:
    data: list[tuple[object, ...]] = []
    for row in rows:
        mobile = normalize_phone(cmap.cell(row, "db_mobile"))
        if not mobile:
            continue
        data.append((mobile, parse_money(cmap.cell(row, "complete_incentive")), VOUCHER_TYPE, QUALIFIED))
    for phone, amount in referrals:
        data.append((phone, amount, VOUCHER_TYPE, REFERRAL_SUCCESS))
    if not data:
        return None
    total = sum(int(r[1]) for r in data)
    base = f"evoucher_gotit-merged-{len(data)}-{total}"
    return ExportArtifact(
        add_project_prefix(config.project_code, base),
        ArtifactKind.CSV,
        MERGED_HEADER,
        tuple(data),
        total=total,
    )


def plan_exports(grouped: GroupedRows, column_map: ColumnMap, config: SplitConfig) -> ExportPlan:
    artifacts: list[ExportArtifact] = []

    evoucher_rows = _evoucher_rows(grouped)
    if evoucher_rows:
        artifacts.append(_topup(evoucher_rows, column_map, config))

    referrals: list[tuple[str, int]] = []
    if grouped.rows_for(REFERRAL):
        referrals = aggregate_referrals(grouped.rows_for(REFERRAL), column_map)
        artifacts.append(_referrer(referrals, config))

    artifacts.extend(_vendor_ids(grouped, column_map, config))

    fulcrum_count = len(grouped.rows_for(FULCRUM))
    if fulcrum_count:
        artifacts.append(_fulcrum_marker(fulcrum_count, config))

    if grouped.disqualified:
        artifacts.append(
            ExportArtifact(
                DISQUALIFIED_NAME,
                ArtifactKind.TABULAR,
                DISQUALIFIED_HEADER,
                tuple(r.as_row() for r in grouped.disqualified),
            )
        )

    merged = _merged(evoucher_rows, referrals, column_map, config)
    if merged is not None:
        artifacts.append(merged)

    report = tuple(a.report_line() for a in artifacts)
    return ExportPlan(artifacts=tuple(artifacts), report=report)
