"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end. Each
function takes the full list of records (as fetched from the store or
produced by the simulator) and returns plain dicts, dataclasses or
DataFrames suitable for rendering cards, charts, and tables.
"""

import logging
from datetime import date
from typing import Iterable, Sequence

import pandas as pd

from .alerts import build_alerts
from .config import TRAILING_WINDOW_DAYS
from .downtime import active_downtimes
from .kpis import build_daily_summary, calc_pit_storage_pct, calc_weekly_trends, calc_window_averages
from .models import DowntimeRecord, OperationalRecord, RangeStatistics
from .transforms import build_daily_totals, build_fact_daily_plant

logger = logging.getLogger(__name__)


def get_available_dates(records: Iterable[OperationalRecord]) -> list[str]:
    """Return sorted distinct dates of complete records, for the date picker."""
    return sorted({r.date for r in records if r.is_complete})


def get_latest_date(records: Iterable[OperationalRecord]) -> str | None:
    dates = get_available_dates(records)
    return dates[-1] if dates else None


def get_dashboard_overview(
    records: Sequence[OperationalRecord],
    selected_date: str | date | None = None,
    downtimes: Iterable[DowntimeRecord] = (),
    window_days: int = TRAILING_WINDOW_DAYS,
) -> dict:
    """Single entry point the dashboard page calls to populate its cards.

    Parameters
    ----------
    records : All records available to the dashboard.
    selected_date : Day to show. Defaults to the latest date with data.
    downtimes : Furnace downtime records; only those overlapping the day
                are returned.
    window_days : Trailing-window length for the averages and trends.

    Returns
    -------
    Dict with structure:
    {
        "date": "2024-03-01",
        "summary": DailySummary,
        "averages": WindowAverages,
        "trends": TrendDeltas,
        "alerts": [Alert, ...],
        "downtimes": [DowntimeRecord, ...],
    }
    or None values throughout when there is no data at all.
    """
    if selected_date is None:
        selected_date = get_latest_date(records)
        if selected_date is None:
            logger.warning("No complete records; dashboard overview is empty")
            return {
                "date": None,
                "summary": None,
                "averages": None,
                "trends": None,
                "alerts": [],
                "downtimes": [],
            }
    elif not isinstance(selected_date, str):
        selected_date = pd.Timestamp(selected_date).strftime("%Y-%m-%d")

    summary = build_daily_summary(records, selected_date)
    daily_totals = build_daily_totals(build_fact_daily_plant(records))
    averages = calc_window_averages(daily_totals, selected_date, window_days)

    return {
        "date": selected_date,
        "summary": summary,
        "averages": averages,
        "trends": calc_weekly_trends(summary, averages),
        "alerts": build_alerts(summary.plants),
        "downtimes": active_downtimes(downtimes, selected_date),
    }


def get_trend_series(records: Iterable[OperationalRecord], days: int = TRAILING_WINDOW_DAYS) -> pd.DataFrame:
    """Daily totals for the last ``days`` dates that have data."""
    daily_totals = build_daily_totals(build_fact_daily_plant(records))
    return daily_totals.tail(days).reset_index(drop=True)


def filter_records(
    records: Iterable[OperationalRecord],
    start_date: str | None = None,
    end_date: str | None = None,
    plant_name: str | None = None,
) -> list[OperationalRecord]:
    """Complete records within the date range and plant, newest first.

    ``plant_name`` of None or "all" keeps every plant.
    """
    result = [r for r in records if r.is_complete]
    if start_date:
        result = [r for r in result if r.date >= start_date]
    if end_date:
        result = [r for r in result if r.date <= end_date]
    if plant_name and plant_name != "all":
        result = [r for r in result if r.plant_name == plant_name]
    return sorted(result, key=lambda r: r.date, reverse=True)


def get_range_statistics(
    records: Iterable[OperationalRecord],
    start_date: str | None = None,
    end_date: str | None = None,
    plant_name: str | None = None,
) -> tuple[list[OperationalRecord], RangeStatistics]:
    """Report-page figures for a filtered date range.

    Returns
    -------
    (filtered records newest first, RangeStatistics). The pit storage
    average is a flat mean over the filtered records.
    """
    filtered = filter_records(records, start_date, end_date, plant_name)

    if filtered:
        avg_pit = sum(calc_pit_storage_pct(r.pit_storage, r.pit_capacity) for r in filtered) / len(filtered)
    else:
        avg_pit = 0.0

    stats = RangeStatistics(
        total_intake=sum(r.total_intake for r in filtered),
        total_incineration=sum(r.incineration_amount for r in filtered),
        average_pit_storage=avg_pit,
        record_count=len(filtered),
    )
    logger.info(
        "Range %s..%s (%s): %d records",
        start_date or "-", end_date or "-", plant_name or "all", len(filtered),
    )
    return filtered, stats
