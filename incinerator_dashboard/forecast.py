"""
Short-horizon projection of daily totals for the trend chart.

A weighted least-squares line is fitted over the whole history with
exponentially decaying weights (the most recent day weighs 1, the one
before ``decay``, then ``decay**2`` ...), and extended ``steps`` days past
the last point. Projections are clamped at zero.
"""

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from .config import FORECAST_DAYS, FORECAST_DECAY

logger = logging.getLogger(__name__)


def predict_next_days(
    points: Sequence[float],
    steps: int = FORECAST_DAYS,
    decay: float = FORECAST_DECAY,
) -> list[float]:
    """Return the projected values for the ``steps`` days after ``points``.

    Needs at least two points; returns [] otherwise. When the fit is
    degenerate every step gets the weighted mean.
    """
    y = np.asarray(points, dtype=float)
    n = len(y)
    if n < 2:
        return []

    x = np.arange(n, dtype=float)
    w = decay ** (n - 1 - x)

    sum_w = w.sum()
    sum_wx = (w * x).sum()
    sum_wy = (w * y).sum()
    sum_wxy = (w * x * y).sum()
    sum_wxx = (w * x * x).sum()

    denominator = sum_w * sum_wxx - sum_wx * sum_wx
    if denominator == 0:
        return [float(sum_wy / sum_w)] * steps

    slope = (sum_w * sum_wxy - sum_wx * sum_wy) / denominator
    intercept = (sum_wy - slope * sum_wx) / sum_w

    return [float(max(0.0, slope * (n - 1 + step) + intercept)) for step in range(1, steps + 1)]


def build_trend_forecast(daily_totals: pd.DataFrame, days: int = FORECAST_DAYS) -> pd.DataFrame:
    """Project intake, incineration and average pit % past the last date.

    Parameters
    ----------
    daily_totals : From transforms.build_daily_totals(), sorted by date.
    days : Number of days to project.

    Returns
    -------
    DataFrame with columns:
        date, total_intake, total_incineration, avg_pit_storage_pct
    Empty when fewer than two days of history exist.
    """
    columns = ["date", "total_intake", "total_incineration", "avg_pit_storage_pct"]
    if len(daily_totals) < 2:
        return pd.DataFrame(columns=columns)

    last_date = pd.Timestamp(daily_totals["date"].iloc[-1])
    result = pd.DataFrame({
        "date": pd.date_range(last_date + pd.Timedelta(days=1), periods=days, freq="D"),
        "total_intake": predict_next_days(daily_totals["total_intake"], days),
        "total_incineration": predict_next_days(daily_totals["total_incineration"], days),
        "avg_pit_storage_pct": predict_next_days(daily_totals["avg_pit_storage_pct"], days),
    })

    logger.info("Projected %d days past %s", days, last_date.date())
    return result
