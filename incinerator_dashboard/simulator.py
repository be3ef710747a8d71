"""
Simulated data generator for the incinerator dashboard.

Generates plausible daily records for the four plants so the dashboard and
the pipeline smoke test run without the spreadsheet store. Figures are
synthetic.
"""

from datetime import datetime, timedelta

import numpy as np
import pandas as pd

from .config import OPTIONAL_FIELDS, PLANTS
from .models import DowntimeRecord, OperationalRecord

# ---------------------------------------------------------------------------
# Typical plant behaviour
# ---------------------------------------------------------------------------
# Starting pit level as a fraction of default capacity
_START_FILL = {
    "中區廠": 0.70,
    "南區廠": 0.95,
    "仁武廠": 0.45,
    "岡山廠": 0.60,
}

# Mean intake relative to incineration (>1 means the pit tends to fill)
_INTAKE_BIAS = {
    "中區廠": 1.02,
    "南區廠": 1.05,
    "仁武廠": 0.97,
    "岡山廠": 1.00,
}

_DOWNTIMES = [
    ("南區廠", 2, "計畫歲修", 3, 10, "年度歲修"),
    ("岡山廠", 1, "臨時停機", 5, 2, "爐排故障"),
]


def generate_plant_records(
    start_date: str = "2026-01-01",
    n_days: int = 30,
    seed: int = 42,
) -> list[OperationalRecord]:
    """Generate ``n_days`` of complete records for every plant.

    Pit storage carries over day to day: tomorrow's level is today's plus
    intake minus incineration, floored at zero.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start_date, periods=n_days, freq="D")
    storage = {p.name: p.default_capacity * _START_FILL[p.name] for p in PLANTS}

    records = []
    for day in dates:
        for plant in PLANTS:
            furnaces = int(rng.integers(max(plant.max_furnaces - 1, 1), plant.max_furnaces + 1))
            incineration = furnaces * plant.standard_per_furnace * rng.uniform(0.85, 1.05)
            intake = incineration * (_INTAKE_BIAS[plant.name] + rng.normal(0, 0.06))
            intake = max(intake, 0.0)

            record = OperationalRecord(
                date=day.strftime("%Y-%m-%d"),
                plant_name=plant.name,
                furnace_count=furnaces,
                total_intake=round(intake, 1),
                incineration_amount=round(incineration, 1),
                pit_storage=round(storage[plant.name], 1),
                pit_capacity=float(plant.default_capacity),
                source="simulator",
            )

            if plant.name == "中區廠":
                for field_name in OPTIONAL_FIELDS:
                    setattr(record, field_name, 0)
            else:
                record.platform_reserved = round(intake * rng.uniform(0.10, 0.20), 1)
                record.actual_intake = round(record.platform_reserved * rng.uniform(0.7, 1.0), 1)
                record.over_reserved_trips = int(rng.poisson(1))
                record.adjusted_trips = int(rng.poisson(1))

            records.append(record)
            storage[plant.name] = max(storage[plant.name] + intake - incineration, 0.0)

    return records


def generate_downtimes(start_date: str = "2026-01-01") -> list[DowntimeRecord]:
    """Generate one planned overhaul and one unplanned stop."""
    base = datetime.fromisoformat(start_date)
    records = []
    for plant, furnace, kind, offset_days, length_days, notes in _DOWNTIMES:
        start = base + timedelta(days=offset_days, hours=8)
        records.append(DowntimeRecord(
            plant_name=plant,
            furnace_number=furnace,
            downtime_type=kind,
            start=start,
            end=start + timedelta(days=length_days),
            notes=notes,
        ))
    return records
