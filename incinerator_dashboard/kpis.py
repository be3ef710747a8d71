"""
Pit and throughput metrics, computed without side effects.

Provides pit occupancy, days-to-full projection, per-furnace efficiency,
daily aggregation across plants, trailing-window averages and trend deltas.
Figures that cannot be computed (no baseline, pit not filling, no furnaces
running) come back as None rather than 0 or infinity.
"""

import logging
import math
import numbers
from datetime import date
from typing import Iterable

import pandas as pd

from .config import (
    DEFAULT_MAX_FURNACES,
    PIT_STATUS_BANDS,
    PLANT_BY_NAME,
    TRAILING_WINDOW_DAYS,
)
from .models import (
    DailySummary,
    OperationalRecord,
    PlantSummary,
    TrendDeltas,
    WindowAverages,
)

logger = logging.getLogger(__name__)


def _is_number(val) -> bool:
    return isinstance(val, numbers.Real) and not isinstance(val, bool) and math.isfinite(val)


def calc_pit_storage_pct(storage: float | None, capacity: float | None) -> float:
    """Return storage as a percentage of capacity.

    0.0 when capacity is zero, absent or not a finite number, and when
    storage is absent.
    """
    if not _is_number(capacity) or capacity == 0 or not _is_number(storage):
        return 0.0
    return storage * 100 / capacity


def calc_trend_delta(today: float | None, baseline: float | None) -> float | None:
    """Return (today - baseline) / baseline * 100.

    None if there is no positive baseline, so the caller can show
    "no baseline" instead of 0% or an infinite trend.
    """
    if not _is_number(today) or not _is_number(baseline) or baseline <= 0:
        return None
    return (today - baseline) / baseline * 100


def calc_days_to_full(
    capacity: float | None,
    storage: float | None,
    intake: float | None,
    incineration: float | None,
) -> float | None:
    """Project days until the pit is full at today's net intake.

    None when the pit is flat or draining (intake <= incineration) or when
    any input is missing. A pit already at or over capacity that is still
    filling returns 0.0.
    """
    if not all(_is_number(v) for v in (capacity, storage, intake, incineration)):
        return None
    net = intake - incineration
    if net <= 0:
        return None
    return max(capacity - storage, 0.0) / net


def calc_per_furnace_efficiency(
    incineration: float | None,
    furnace_count: int | None,
) -> float | None:
    """Return tons incinerated per running furnace, None if none are running."""
    if not _is_number(incineration) or not _is_number(furnace_count) or furnace_count <= 0:
        return None
    return incineration / furnace_count


def classify_pit_status(pct: float) -> str:
    """Return 'red', 'orange', 'yellow' or 'green' for a pit occupancy %.

    Logic
    -----
    red     pct > 100  (over capacity)
    orange  pct > 80
    yellow  pct > 60
    green   otherwise
    """
    if not _is_number(pct):
        return "green"
    for threshold, status in PIT_STATUS_BANDS:
        if pct > threshold:
            return status
    return "green"


def max_furnaces_for(plant_name: str | None) -> int:
    plant = PLANT_BY_NAME.get(plant_name)
    return plant.max_furnaces if plant else DEFAULT_MAX_FURNACES


def build_plant_summary(record: OperationalRecord) -> PlantSummary:
    """Derive the per-plant card figures from one complete record."""
    return PlantSummary(
        plant_name=record.plant_name,
        total_intake=record.total_intake,
        incineration_amount=record.incineration_amount,
        pit_storage=record.pit_storage,
        pit_capacity=record.pit_capacity,
        pit_storage_pct=calc_pit_storage_pct(record.pit_storage, record.pit_capacity),
        furnace_count=record.furnace_count,
        max_furnaces=max_furnaces_for(record.plant_name),
        platform_reserved=record.platform_reserved,
        actual_intake=record.actual_intake,
        days_to_full=calc_days_to_full(
            record.pit_capacity,
            record.pit_storage,
            record.total_intake,
            record.incineration_amount,
        ),
        per_furnace_efficiency=calc_per_furnace_efficiency(
            record.incineration_amount, record.furnace_count
        ),
    )


def build_daily_summary(
    records: Iterable[OperationalRecord],
    day: str | date,
) -> DailySummary:
    """Aggregate all plants reporting on ``day``.

    Rules
    -----
    - Tonnages and running furnaces: sum over plants.
    - Stopped furnaces: sum of (configured max - reported), floored at 0
      per plant.
    - Incomplete records are left out.
    """
    if not isinstance(day, str):
        day = pd.Timestamp(day).strftime("%Y-%m-%d")

    day_records = [r for r in records if r.date == day]
    usable = [r for r in day_records if r.is_complete]
    if len(usable) < len(day_records):
        logger.warning(
            "Skipping %d incomplete records for %s",
            len(day_records) - len(usable), day,
        )

    plants = tuple(build_plant_summary(r) for r in usable)
    return DailySummary(
        date=day,
        total_intake=sum(p.total_intake for p in plants),
        total_incineration=sum(p.incineration_amount for p in plants),
        furnaces_running=sum(p.furnace_count for p in plants),
        furnaces_stopped=sum(max(p.max_furnaces - p.furnace_count, 0) for p in plants),
        plants=plants,
    )


def calc_window_averages(
    daily_totals: pd.DataFrame,
    reference_date: str | date,
    window_days: int = TRAILING_WINDOW_DAYS,
) -> WindowAverages:
    """Average the daily totals over the N days ending on ``reference_date``.

    Rules
    -----
    - Intake, incineration: mean of each day's total across plants.
    - Pit storage %: mean of each day's plant-averaged occupancy.
    - Ratio: total intake / total incineration over the whole window
      (weighted, so light days do not dominate); 0.0 if nothing was burnt.
    - Only days with data count towards the means.

    Parameters
    ----------
    daily_totals : From transforms.build_daily_totals().
    reference_date : Last day of the window (inclusive).
    window_days : Window length in calendar days.
    """
    ref = pd.Timestamp(reference_date)
    start = ref - pd.Timedelta(days=window_days - 1)

    if daily_totals.empty:
        window = daily_totals
    else:
        window = daily_totals[(daily_totals["date"] >= start) & (daily_totals["date"] <= ref)]

    if window.empty:
        logger.warning("No data in the %d-day window ending %s", window_days, ref.date())
        return WindowAverages(0.0, 0.0, 0.0, 0.0, 0)

    total_intake = float(window["total_intake"].sum())
    total_incineration = float(window["total_incineration"].sum())
    avg_ratio = total_intake * 100 / total_incineration if total_incineration > 0 else 0.0

    return WindowAverages(
        avg_intake=float(window["total_intake"].mean()),
        avg_incineration=float(window["total_incineration"].mean()),
        avg_pit_storage_pct=float(window["avg_pit_storage_pct"].mean()),
        avg_ratio=avg_ratio,
        days=len(window),
    )


def calc_weekly_trends(summary: DailySummary, averages: WindowAverages) -> TrendDeltas:
    """Compare one day's summary with its trailing-window averages."""
    return TrendDeltas(
        intake_trend=calc_trend_delta(summary.total_intake, averages.avg_intake),
        incineration_trend=calc_trend_delta(summary.total_incineration, averages.avg_incineration),
        pit_storage_trend=calc_trend_delta(summary.avg_pit_storage_pct, averages.avg_pit_storage_pct),
        ratio_trend=calc_trend_delta(summary.intake_ratio, averages.avg_ratio),
    )
