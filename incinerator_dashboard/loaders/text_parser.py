"""
Parser for operator notes pasted into the data-input page.

Three layouts are recognised, tried in this order:

1. CSV — a header line naming at least two known fields, followed by one
   or more comma-separated rows. Every non-empty row becomes one record.
2. Plant lines — one line per plant, as sent in the daily LINE report:
       中區廠:3爐,總進廠量1,138噸,焚化量674噸,貯坑存量7,127/6,900(103.3%)
3. Labels — a single record written as "label: value" lines:
       日期: 2024-03-01
       廠區: 中區廠
       爐數: 2

Malformed input never raises. Unparseable values leave the field as None
and the record is still returned so the operator can correct it.
"""

import logging
import re
from datetime import date

from ..config import (
    CSV_HEADER_MIN_TOKENS,
    INTEGER_FIELDS,
    OPTIONAL_FIELDS,
    PLANT_NAMES,
)
from ..models import OperationalRecord, ParseResult
from .utils import (
    coerce_field,
    extract_date,
    find_header_tokens,
    match_field_label,
    normalise_date,
    safe_float,
    safe_int,
)

logger = logging.getLogger(__name__)

EXAMPLE_FORMAT = """CSV 格式範例 (批次輸入):
日期,廠區,運轉爐數,平台預約量,超過預約量車次,調整後進廠車次,實際進廠量,總進廠量,焚化量,貯坑存量,貯坑容量,貯坑百分比
1/20,中區廠,2,,,,787,490,7231,6900,104.8%
1/20,南區廠,2,182,2,2,152,426,149,28424,18000,158%

或是各廠一行:
2026/01/22
中區廠:3爐,總進廠量1,138噸,焚化量674噸,貯坑存量7,127/6,900(103.3%)
南區廠:2爐,平台預約179噸,實際進廠135噸,超約0車/調整0車,總進廠量426噸,焚化量149噸,貯坑存量28,424/18,000

或是單筆文字格式:
日期: 2026-01-22
廠區: 中區廠
爐數: 3
總進廠量: 450 噸
焚化量: 420 噸
貯坑量: 350 噸
貯坑容量: 1000 噸"""

_LABEL_LINE_RE = re.compile(r"^\s*([^:：]+?)\s*[:：]\s*(.*?)\s*$")

_PLANT_PATTERN = "|".join(re.escape(name) for name in PLANT_NAMES)
_PLANT_LINE_RE = re.compile(rf"^({_PLANT_PATTERN})\s*[:：]")

_NUM = r"([0-9][0-9,]*(?:\.\d+)?)"

# Field patterns for the plant-line layout
_PLANT_LINE_FIELDS: dict[str, re.Pattern] = {
    "furnace_count": re.compile(r"[:：,，]\s*(\d+)\s*爐"),
    "total_intake": re.compile(rf"總進廠量\s*[:：]?\s*{_NUM}"),
    "incineration_amount": re.compile(rf"焚化量\s*[:：]?\s*{_NUM}"),
    "platform_reserved": re.compile(rf"平台預約\s*[:：]?\s*{_NUM}"),
    "actual_intake": re.compile(rf"實際進廠\s*[:：]?\s*{_NUM}"),
}
_PIT_RE = re.compile(rf"貯坑存量\s*[:：]?\s*{_NUM}\s*[/／]\s*{_NUM}")
_TRIPS_RE = re.compile(r"超約\s*[:：]?\s*(\d+)\s*車\s*[/／]\s*調整\s*[:：]?\s*(\d+)\s*車")

# The central plant does not use the reservation platform
_NO_PLATFORM_PLANTS = {"中區廠"}


def _apply_default_date(records: list[OperationalRecord], default_date: str | None) -> None:
    if default_date is None:
        return
    for record in records:
        if record.date is None:
            record.date = default_date


# ---------------------------------------------------------------------------
# CSV layout
# ---------------------------------------------------------------------------

def _align_row(values: list[str], header: list[str | None]) -> list[str]:
    """Line a short row up against the header.

    Operators drop the optional platform columns they have no figures for.
    When the header carries such columns, the leading identity columns are
    filled from the start of the row, the trailing tonnage columns from the
    end, and whatever is left goes into the optional columns in order.
    Without optional columns the row maps positionally.
    """
    n_cols = len(header)
    if len(values) >= n_cols:
        return values[:n_cols]

    optional_idx = [i for i, f in enumerate(header) if f in OPTIONAL_FIELDS]
    if not optional_idx:
        return values + [""] * (n_cols - len(values))

    lead = optional_idx[0]
    trail = n_cols - 1 - optional_idx[-1]

    aligned = [""] * n_cols
    lead_used = min(lead, len(values))
    aligned[:lead_used] = values[:lead_used]

    trail_used = min(trail, len(values) - lead_used)
    for j in range(trail_used):
        aligned[n_cols - 1 - j] = values[len(values) - 1 - j]

    middle = values[lead_used:len(values) - trail_used]
    for j, val in enumerate(middle):
        if lead + j < n_cols - trail:
            aligned[lead + j] = val

    return aligned


def _parse_csv(
    lines: list[str],
    header: list[str | None],
    default_year: int | None,
) -> list[OperationalRecord]:
    records = []
    for line in lines:
        values = [v.strip() for v in line.split(",")]
        aligned = _align_row(values, header)

        record = OperationalRecord(source=line)
        for field_name, raw in zip(header, aligned):
            if field_name is None or getattr(record, field_name) is not None:
                continue
            setattr(record, field_name, coerce_field(field_name, raw, default_year))
        records.append(record)
    return records


# ---------------------------------------------------------------------------
# Plant-line layout
# ---------------------------------------------------------------------------

def _parse_plant_line(line: str, plant_name: str, line_date: str | None) -> OperationalRecord:
    record = OperationalRecord(date=line_date, plant_name=plant_name, source=line)

    for field_name, pattern in _PLANT_LINE_FIELDS.items():
        match = pattern.search(line)
        if match:
            coerce = safe_int if field_name in INTEGER_FIELDS else safe_float
            setattr(record, field_name, coerce(match.group(1)))

    pit = _PIT_RE.search(line)
    if pit:
        record.pit_storage = safe_float(pit.group(1))
        record.pit_capacity = safe_float(pit.group(2))

    trips = _TRIPS_RE.search(line)
    if trips:
        record.over_reserved_trips = safe_int(trips.group(1))
        record.adjusted_trips = safe_int(trips.group(2))

    if plant_name in _NO_PLATFORM_PLANTS:
        for field_name in OPTIONAL_FIELDS:
            if getattr(record, field_name) is None:
                setattr(record, field_name, 0)

    return record


def _parse_plant_lines(lines: list[str], text: str) -> list[OperationalRecord]:
    text_date = extract_date(text)
    records = []
    for line in lines:
        match = _PLANT_LINE_RE.match(line)
        if match:
            records.append(_parse_plant_line(line, match.group(1), text_date))
    return records


# ---------------------------------------------------------------------------
# Label layout
# ---------------------------------------------------------------------------

def _parse_labels(lines: list[str], default_year: int | None) -> OperationalRecord | None:
    record = OperationalRecord()
    source_lines = []

    for line in lines:
        match = _LABEL_LINE_RE.match(line)
        if not match:
            continue
        field_name = match_field_label(match.group(1))
        if field_name is None:
            continue
        source_lines.append(line)
        if getattr(record, field_name) is not None:
            continue
        setattr(record, field_name, coerce_field(field_name, match.group(2), default_year))

    if not source_lines:
        return None
    record.source = "\n".join(source_lines)
    return record


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse_text(text: str, default_date: str | date | None = None) -> ParseResult:
    """Parse pasted text and report which layout was detected.

    Parameters
    ----------
    text : Raw text as typed or pasted by the operator.
    default_date : Date selected in the UI. Applied only to records whose
                   text carries no date; also supplies the year for
                   short "M/D" dates.

    Returns
    -------
    ParseResult with records in input order and ``fmt`` set to one of
    "csv", "plant_lines", "labels" or "none".
    """
    if not text or not text.strip():
        return ParseResult()

    fallback_date = normalise_date(default_date)
    default_year = int(fallback_date[:4]) if fallback_date else None

    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]

    header = find_header_tokens(lines[0], CSV_HEADER_MIN_TOKENS)
    data_lines = lines[1:]
    if header is not None and any("," in line for line in data_lines):
        records = _parse_csv(data_lines, header, default_year)
        fmt = "csv"
    elif any(_PLANT_LINE_RE.match(line) for line in lines):
        records = _parse_plant_lines(lines, text)
        fmt = "plant_lines"
    else:
        record = _parse_labels(lines, default_year)
        records = [record] if record is not None else []
        fmt = "labels" if records else "none"

    _apply_default_date(records, fallback_date)

    n_complete = sum(1 for r in records if r.is_complete)
    logger.info(
        "Parsed %d records (%d complete) from %s input",
        len(records), n_complete, fmt,
    )
    return ParseResult(records=records, fmt=fmt)


def parse_operational_text(
    text: str,
    default_date: str | date | None = None,
) -> list[OperationalRecord]:
    """Parse pasted text into records; empty list when nothing is recognised."""
    return parse_text(text, default_date).records
