"""
Data transforms: turn raw records into dashboard-ready DataFrames.

Spreadsheet rows arrive with every cell as a string and camelCase keys;
records_from_rows coerces them. build_fact_daily_plant and
build_daily_totals produce the plant-day and day grain tables the charts
and trailing-window averages are computed from.
"""

import logging
from typing import Iterable, Mapping

import pandas as pd

from .config import OPTIONAL_FIELDS, REQUIRED_FIELDS
from .kpis import calc_pit_storage_pct, max_furnaces_for
from .loaders.utils import coerce_field, match_field_label
from .models import OperationalRecord

logger = logging.getLogger(__name__)

FACT_DAILY_COLUMNS = [
    "date", "plant_name",
    "furnace_count", "max_furnaces", "furnaces_stopped",
    "total_intake", "incineration_amount",
    "pit_storage", "pit_capacity", "pit_storage_pct",
    "platform_reserved", "actual_intake",
    "over_reserved_trips", "adjusted_trips",
]

DAILY_TOTALS_COLUMNS = [
    "date", "total_intake", "total_incineration",
    "furnaces_running", "furnaces_stopped",
    "avg_pit_storage_pct", "plant_count",
]


def records_from_rows(rows: Iterable[Mapping]) -> list[OperationalRecord]:
    """Coerce raw store rows (strings, camelCase keys) into records.

    Unknown keys (id, createdAt, ...) are ignored. Values that fail to
    coerce become None; nothing is dropped.
    """
    records = []
    for row in rows:
        record = OperationalRecord()
        for key, raw in row.items():
            field_name = match_field_label(key)
            if field_name is None or getattr(record, field_name) is not None:
                continue
            setattr(record, field_name, coerce_field(field_name, raw))
        records.append(record)

    logger.info("Coerced %d store rows into records", len(records))
    return records


def build_fact_daily_plant(records: Iterable[OperationalRecord]) -> pd.DataFrame:
    """Build the plant-day fact table from complete records.

    Returns
    -------
    fact_daily_plant DataFrame with FACT_DAILY_COLUMNS, sorted by date
    (input order kept within a day). ``date`` is datetime64.
    """
    records = list(records)
    usable = [r for r in records if r.is_complete]
    if len(usable) < len(records):
        logger.warning(
            "Leaving %d incomplete records out of fact_daily_plant",
            len(records) - len(usable),
        )

    if not usable:
        logger.warning("No complete records. Returning empty fact_daily_plant with schema.")
        df = pd.DataFrame(columns=FACT_DAILY_COLUMNS)
        df["date"] = pd.to_datetime(df["date"])
        return df

    rows = []
    for r in usable:
        max_furnaces = max_furnaces_for(r.plant_name)
        row = {name: getattr(r, name) for name in REQUIRED_FIELDS + OPTIONAL_FIELDS}
        row["max_furnaces"] = max_furnaces
        row["furnaces_stopped"] = max(max_furnaces - r.furnace_count, 0)
        row["pit_storage_pct"] = calc_pit_storage_pct(r.pit_storage, r.pit_capacity)
        rows.append(row)

    df = pd.DataFrame(rows, columns=FACT_DAILY_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    df = df.sort_values("date", kind="stable").reset_index(drop=True)

    logger.info("Built fact_daily_plant with %d rows", len(df))
    return df


def build_daily_totals(fact_daily: pd.DataFrame) -> pd.DataFrame:
    """Aggregate fact_daily_plant to one row per date.

    Rules
    -----
    - Tonnages, running and stopped furnaces: sum over plants
    - Pit storage %: mean over the plants reporting that day
    """
    if fact_daily.empty:
        df = pd.DataFrame(columns=DAILY_TOTALS_COLUMNS)
        df["date"] = pd.to_datetime(df["date"])
        return df

    result = (
        fact_daily.groupby("date", sort=True)
        .agg(
            total_intake=("total_intake", "sum"),
            total_incineration=("incineration_amount", "sum"),
            furnaces_running=("furnace_count", "sum"),
            furnaces_stopped=("furnaces_stopped", "sum"),
            avg_pit_storage_pct=("pit_storage_pct", "mean"),
            plant_count=("plant_name", "count"),
        )
        .reset_index()
    )

    logger.info("Built daily totals for %d days", len(result))
    return result
