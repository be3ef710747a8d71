"""
Shared utilities for ingestion: value coercion, date normalisation,
field-label matching and header detection.
"""

import logging
import math
import re
from datetime import date
from typing import Any

import pandas as pd

from ..config import (
    FIELD_LABEL_MAP,
    INTEGER_FIELDS,
    PLANT_NAMES,
    VALUE_UNIT_SUFFIXES,
)

logger = logging.getLogger(__name__)

_FULL_DATE_RE = re.compile(r"(\d{4})\s*[-/年.]\s*(\d{1,2})\s*[-/月.]\s*(\d{1,2})\s*日?")
_SHORT_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})$")


def _clean_numeric_text(val: str) -> str:
    s = val.strip().replace(",", "").replace("，", "")
    for suffix in VALUE_UNIT_SUFFIXES:
        if s.endswith(suffix):
            s = s[: -len(suffix)].strip()
            break
    return s


def safe_float(val: Any) -> float | None:
    """Coerce a value to a finite float, returning None when it is not one.

    Strings may carry thousands separators and a trailing unit ("1,138 噸").
    Percentages are rejected: a "%" cell is a derived column, not a figure.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        s = _clean_numeric_text(val)
        if not s or "%" in s:
            return None
        try:
            result = float(s)
        except ValueError:
            return None
    else:
        try:
            result = float(val)
        except (ValueError, TypeError):
            return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(val: Any) -> int | None:
    """Coerce a value to int; non-integral numbers count as absent."""
    result = safe_float(val)
    if result is None or not result.is_integer():
        return None
    return int(result)


def normalise_date(val: Any, default_year: int | None = None) -> str | None:
    """Convert a date-like value to a ``YYYY-MM-DD`` string.

    Accepts ``YYYY-MM-DD``, ``YYYY/M/D``, ``YYYY年M月D日``, ``M/D`` (using
    ``default_year``, else the current year), and date/Timestamp objects.
    Returns None for unparseable values or impossible calendar dates.
    """
    if val is None:
        return None
    if isinstance(val, (date, pd.Timestamp)):
        return pd.Timestamp(val).strftime("%Y-%m-%d")

    s = str(val).strip()
    if not s:
        return None

    match = _FULL_DATE_RE.search(s)
    if match:
        year, month, day = (int(g) for g in match.groups())
    else:
        short = _SHORT_DATE_RE.match(s)
        if not short:
            return None
        year = default_year if default_year is not None else date.today().year
        month, day = int(short.group(1)), int(short.group(2))

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        logger.warning("Could not parse date value: %s", val)
        return None


def extract_date(text: str) -> str | None:
    """Return the first full date found anywhere in ``text``."""
    match = _FULL_DATE_RE.search(text)
    if not match:
        return None
    return normalise_date(match.group(0))


def normalise_plant_name(val: Any) -> str | None:
    """Return the configured plant name, or None if ``val`` is not one."""
    if val is None:
        return None
    s = str(val).strip()
    return s if s in PLANT_NAMES else None


def match_field_label(label: str) -> str | None:
    """Map a raw label ("爐數", "furnaceCount", "Total Intake") to a field name."""
    key = re.sub(r"\s+", "", str(label)).lower()
    return FIELD_LABEL_MAP.get(key)


def find_header_tokens(line: str, min_tokens: int = 2) -> list[str | None] | None:
    """Interpret a comma-separated line as a header.

    Returns the per-column field names (None for unrecognised columns) when
    at least ``min_tokens`` columns are recognised, otherwise None.
    """
    if "," not in line:
        return None
    tokens = [match_field_label(cell) for cell in line.split(",")]
    if sum(1 for t in tokens if t is not None) < min_tokens:
        return None
    return tokens


def coerce_field(field_name: str, raw: Any, default_year: int | None = None):
    """Coerce a raw cell or label value into the type of ``field_name``."""
    if field_name == "date":
        return normalise_date(raw, default_year=default_year)
    if field_name == "plant_name":
        return normalise_plant_name(raw)
    if field_name in INTEGER_FIELDS:
        return safe_int(raw)
    return safe_float(raw)
