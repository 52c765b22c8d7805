"""
csse_ingest/parsing/coercion.py

Best-effort coercion of raw report cells into typed values.

Every helper returns a value for any input. Missing or malformed cells resolve
to a per-type fallback so that one dirty cell never drops the whole row.
"""

from __future__ import annotations

import math
import re

_UNSIGNED_INT_PATTERN = re.compile(r"\+?[0-9]+")
_SIGNED_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

SERIES_GAP_VALUE = -1
UNSIGNED_COUNT_MAX = 2**32 - 1


def coerce_string(raw: str | None) -> str:
    if raw is None:
        return ""
    return raw


def coerce_unsigned_int(raw: str | None) -> int:
    """
    Parse a non-negative count, falling back to 0.

    Values beyond the unsigned 32-bit range are treated as malformed.
    """

    if raw is None:
        return 0
    value = raw.strip()
    if not _UNSIGNED_INT_PATTERN.fullmatch(value):
        return 0
    parsed = int(value)
    if parsed > UNSIGNED_COUNT_MAX:
        return 0
    return parsed


def coerce_optional_int(raw: str | None) -> int | None:
    """
    Parse a signed integer, returning None when the cell is absent or malformed.
    """

    if raw is None:
        return None
    value = raw.strip()
    if not _SIGNED_INT_PATTERN.fullmatch(value):
        return None
    return int(value)


def coerce_signed_int(raw: str | None, fallback: int = SERIES_GAP_VALUE) -> int:
    parsed = coerce_optional_int(raw)
    return fallback if parsed is None else parsed


def coerce_optional_float(raw: str | None) -> float | None:
    """
    Parse a coordinate. Absent, malformed, and non-finite values yield None,
    which is distinct from a genuine 0.0 reading.
    """

    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed
