import copy
import math
from datetime import date

import pytest

from incinerator_dashboard.kpis import (
    build_daily_summary,
    build_plant_summary,
    calc_days_to_full,
    calc_per_furnace_efficiency,
    calc_pit_storage_pct,
    calc_trend_delta,
    calc_weekly_trends,
    calc_window_averages,
    classify_pit_status,
)
from incinerator_dashboard.models import OperationalRecord
from incinerator_dashboard.transforms import build_daily_totals, build_fact_daily_plant


def _daily_totals(records):
    return build_daily_totals(build_fact_daily_plant(records))


# ---------------------------------------------------------------------------
# Single-figure calculations
# ---------------------------------------------------------------------------

def test_pit_storage_pct():
    assert calc_pit_storage_pct(400, 1000) == 40.0


def test_pit_storage_pct_is_exact_at_whole_percentages():
    assert calc_pit_storage_pct(1100, 1000) == 110.0
    assert calc_pit_storage_pct(850, 1000) == 85.0
    assert calc_pit_storage_pct(600, 1000) == 60.0


@pytest.mark.parametrize("capacity", [0, 0.0, None, "abc", float("nan"), float("inf")])
def test_pit_storage_pct_without_capacity_is_zero(capacity):
    result = calc_pit_storage_pct(400, capacity)
    assert result == 0.0
    assert not math.isnan(result)


def test_pit_storage_pct_without_storage_is_zero():
    assert calc_pit_storage_pct(None, 1000) == 0.0


def test_trend_delta():
    assert calc_trend_delta(110, 100) == pytest.approx(10.0)
    assert calc_trend_delta(90, 100) == pytest.approx(-10.0)


@pytest.mark.parametrize("baseline", [0, 0.0, None, -5.0])
def test_trend_delta_without_positive_baseline_is_absent(baseline):
    assert calc_trend_delta(50, baseline) is None


def test_days_to_full_when_pit_is_filling():
    assert calc_days_to_full(1000, 400, 150, 100) == pytest.approx(12.0)


def test_days_to_full_absent_when_pit_shrinks():
    assert calc_days_to_full(1000, 500, 100, 120) is None


def test_days_to_full_absent_when_pit_flat():
    assert calc_days_to_full(1000, 500, 100, 100) is None


def test_days_to_full_is_zero_when_already_over_capacity():
    assert calc_days_to_full(1000, 1100, 150, 100) == 0.0


def test_days_to_full_absent_with_missing_input():
    assert calc_days_to_full(None, 500, 150, 100) is None


def test_per_furnace_efficiency():
    assert calc_per_furnace_efficiency(300, 2) == 150.0
    assert calc_per_furnace_efficiency(300, 0) is None
    assert calc_per_furnace_efficiency(300, None) is None


@pytest.mark.parametrize(
    "pct, status",
    [(101, "red"), (100, "orange"), (80.5, "orange"), (80, "yellow"), (61, "yellow"), (60, "green"), (0, "green")],
)
def test_classify_pit_status(pct, status):
    assert classify_pit_status(pct) == status


# ---------------------------------------------------------------------------
# Plant and daily summaries
# ---------------------------------------------------------------------------

def test_build_plant_summary(make_record):
    summary = build_plant_summary(make_record(total_intake=150.0, incineration_amount=100.0))
    assert summary.pit_storage_pct == 40.0
    assert summary.max_furnaces == 3
    assert summary.days_to_full == pytest.approx(12.0)
    assert summary.per_furnace_efficiency == 50.0


def test_build_plant_summary_scenario_c(make_record):
    summary = build_plant_summary(make_record(
        total_intake=100.0, incineration_amount=120.0, pit_storage=500.0, pit_capacity=1000.0,
    ))
    assert summary.days_to_full is None


def test_build_daily_summary(make_record):
    records = [
        make_record(plant_name="中區廠", furnace_count=2, total_intake=100.0,
                    incineration_amount=90.0, pit_storage=400.0, pit_capacity=1000.0),
        # Over-reports furnaces beyond its configured four
        make_record(plant_name="南區廠", furnace_count=5, total_intake=200.0,
                    incineration_amount=180.0, pit_storage=600.0, pit_capacity=1200.0),
        OperationalRecord(date="2024-03-01", plant_name="仁武廠", furnace_count=3),
        make_record(date="2024-03-02", plant_name="岡山廠"),
    ]
    summary = build_daily_summary(records, "2024-03-01")

    assert summary.total_intake == 300.0
    assert summary.total_incineration == 270.0
    assert summary.furnaces_running == 7
    assert summary.furnaces_stopped == 1
    assert [p.plant_name for p in summary.plants] == ["中區廠", "南區廠"]
    assert summary.avg_pit_storage_pct == pytest.approx(45.0)
    assert summary.intake_ratio == pytest.approx(300 / 270 * 100)
    assert summary.total_capacity == 2200.0
    assert summary.remaining_capacity == 1200.0


def test_build_daily_summary_accepts_date_objects(make_record):
    summary = build_daily_summary([make_record()], date(2024, 3, 1))
    assert summary.date == "2024-03-01"
    assert len(summary.plants) == 1


def test_build_daily_summary_for_day_without_data(make_record):
    summary = build_daily_summary([make_record()], "2024-04-01")
    assert summary.plants == ()
    assert summary.total_intake == 0
    assert summary.avg_pit_storage_pct == 0.0
    assert summary.intake_ratio == 0.0


# ---------------------------------------------------------------------------
# Trailing window
# ---------------------------------------------------------------------------

def test_window_averages_use_daily_totals(two_day_records):
    averages = calc_window_averages(_daily_totals(two_day_records), "2024-03-02")

    # Day totals: 200 and 300 intake; a flat per-record mean would be 166.7
    assert averages.avg_intake == pytest.approx(250.0)
    assert averages.avg_incineration == pytest.approx(175.0)
    # Day averages of plant occupancy: (40 + 60) / 2 and 20
    assert averages.avg_pit_storage_pct == pytest.approx(35.0)
    assert averages.days == 2


def test_window_ratio_is_weighted(two_day_records):
    averages = calc_window_averages(_daily_totals(two_day_records), "2024-03-02")
    # 500 intake over 350 incinerated, not the mean of 400% and 100%
    assert averages.avg_ratio == pytest.approx(500 / 350 * 100)


def test_window_bounds_are_inclusive_and_trailing(make_record):
    records = [
        make_record(date="2024-02-23", total_intake=1000.0),  # 8 days back
        make_record(date="2024-02-24", total_intake=100.0),   # first day of window
        make_record(date="2024-03-01", total_intake=300.0),   # reference day
        make_record(date="2024-03-02", total_intake=5000.0),  # after reference
    ]
    averages = calc_window_averages(_daily_totals(records), "2024-03-01", window_days=7)
    assert averages.days == 2
    assert averages.avg_intake == pytest.approx(200.0)


def test_window_without_data():
    averages = calc_window_averages(_daily_totals([]), "2024-03-01")
    assert averages.days == 0
    assert averages.avg_intake == 0.0
    assert averages.avg_ratio == 0.0


def test_zero_intake_week_has_no_intake_trend(make_record):
    records = [
        make_record(date=f"2024-03-{day:02d}", total_intake=0.0, incineration_amount=50.0)
        for day in range(1, 8)
    ]
    summary = build_daily_summary(records, "2024-03-07")
    averages = calc_window_averages(_daily_totals(records), "2024-03-07")
    trends = calc_weekly_trends(summary, averages)

    assert averages.days == 7
    assert trends.intake_trend is None
    assert trends.incineration_trend == pytest.approx(0.0)


def test_weekly_trends(two_day_records):
    summary = build_daily_summary(two_day_records, "2024-03-02")
    averages = calc_window_averages(_daily_totals(two_day_records), "2024-03-02")
    trends = calc_weekly_trends(summary, averages)

    assert trends.intake_trend == pytest.approx((300 - 250) / 250 * 100)
    assert trends.incineration_trend == pytest.approx((300 - 175) / 175 * 100)
    assert trends.pit_storage_trend == pytest.approx((20 - 35) / 35 * 100)


def test_calculations_are_repeatable_and_leave_input_untouched(two_day_records):
    before = copy.deepcopy(two_day_records)

    first = build_daily_summary(two_day_records, "2024-03-01")
    second = build_daily_summary(two_day_records, "2024-03-01")
    assert first == second

    totals = _daily_totals(two_day_records)
    assert calc_window_averages(totals, "2024-03-02") == calc_window_averages(totals, "2024-03-02")

    assert two_day_records == before
