from __future__ import annotations

import re
from collections.abc import Callable

"""Cell normalizers for the split engine.

All functions are total: they accept any cell value (None included) and
never raise. Malformed money or phone text degrades to 0 / "" and the
caller decides whether to report it (see has_digits).
"""

__all__ = [
    "REFERRAL",
    "ZALO_GROUP",
    "PURE_SPECTRUM",
    "FULCRUM",
    "EVOUCHER_SOURCES",
    "trim",
    "normalize_label",
    "parse_money",
    "normalize_phone",
    "normalize_status",
    "normalize_source_key",
    "has_digits",
]

REFERRAL = "referral"
ZALO_GROUP = "zalogroup"
PURE_SPECTRUM = "pp_purespectrum"
FULCRUM = "pp_fulcrum"

# Sources paid through the GotIt e-voucher top-up, in export order.
EVOUCHER_SOURCES: tuple[str, ...] = ("", ZALO_GROUP, REFERRAL)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_NON_MONEY = re.compile(r"[^0-9-]")
_NON_DIGIT = re.compile(r"[^0-9]+")
_LEADING_INT = re.compile(r"^-?[0-9]+")
_DIGIT = re.compile(r"[0-9]")


def trim(value: object) -> str:
    return "" if value is None else str(value).strip()


def normalize_label(value: object) -> str:
    """Lower-case and drop every non-alphanumeric character (header matching)."""
    return _NON_ALNUM.sub("", trim(value).lower())


def parse_money(value: object) -> int:
    """Parse a VND amount such as ``"30.000 đ"`` -> 30000.

    Everything except digits and minus signs is removed, then the leading
    integer is read. Empty, ``"-"`` or unparsable text gives 0.
    """
    cleaned = _NON_MONEY.sub("", trim(value))
    if not cleaned or cleaned == "-":
        return 0
    m = _LEADING_INT.match(cleaned)
    return int(m.group(0)) if m else 0


def normalize_phone(value: object) -> str:
    return _NON_DIGIT.sub("", trim(value))


def normalize_status(value: object) -> str:
    return trim(value).lower()


def has_digits(value: object) -> bool:
    return _DIGIT.search(trim(value)) is not None


def _one_of(*names: str) -> Callable[[str], bool]:
    members = frozenset(names)
    return lambda s: s in members


# (predicate, canonical key) pairs, first match wins. Anything unmatched is
# passed through as an opaque vendor key.
SOURCE_SYNONYMS: tuple[tuple[Callable[[str], bool], str], ...] = (
    (_one_of("referral", "referal"), REFERRAL),
    (_one_of("zalo", "zalo group", "zalo-group", "zalo_group"), ZALO_GROUP),
    (_one_of("pp pure spectrum", "pp-purespectrum", "pp_pure_spectrum"), PURE_SPECTRUM),
)


def normalize_source_key(value: object) -> str:
    s = trim(value).lower()
    if not s:
        return ""
    for matches, canonical in SOURCE_SYNONYMS:
        if matches(s):
            return canonical
    return s
