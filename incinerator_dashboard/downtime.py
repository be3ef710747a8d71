"""Furnace downtime records: which outages touch a given day."""

import logging
from datetime import date, datetime, time
from typing import Iterable

import pandas as pd

from .models import DowntimeRecord

logger = logging.getLogger(__name__)

_NUMERALS = ["零", "一", "二", "三", "四", "五", "六", "七", "八", "九", "十"]


def active_downtimes(
    records: Iterable[DowntimeRecord],
    day: str | date,
) -> list[DowntimeRecord]:
    """Return downtimes whose [start, end] overlaps the calendar day."""
    day = pd.Timestamp(day).date()
    day_start = datetime.combine(day, time.min)
    day_end = datetime.combine(day, time.max)

    active = [d for d in records if d.start <= day_end and d.end >= day_start]
    logger.debug("%d downtimes active on %s", len(active), day)
    return active


def furnace_label(furnace_number: int) -> str:
    """Return the furnace label shown on the dashboard, e.g. "二號爐"."""
    if 0 <= furnace_number < len(_NUMERALS):
        return f"{_NUMERALS[furnace_number]}號爐"
    return f"{furnace_number}號爐"
