"""
Incinerator Operations Dashboard — End-to-end analytics pipeline.

Runs the pipeline from simulated records and pasted operator text to
dashboard-ready outputs and prints smoke-test summaries.

Usage:
    python main.py
"""

import logging

from incinerator_dashboard.dashboard import (
    get_dashboard_overview,
    get_range_statistics,
    get_trend_series,
)
from incinerator_dashboard.downtime import furnace_label
from incinerator_dashboard.forecast import build_trend_forecast
from incinerator_dashboard.kpis import classify_pit_status
from incinerator_dashboard.loaders import EXAMPLE_FORMAT, parse_text
from incinerator_dashboard.simulator import generate_downtimes, generate_plant_records
from incinerator_dashboard.transforms import build_daily_totals, build_fact_daily_plant
from incinerator_dashboard.validators import format_validation_errors, validate_downtime, validate_record

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def _fmt(val, spec: str = ",.1f") -> str:
    return "N/A" if val is None else format(val, spec)


def main() -> None:
    """Run the full analytics pipeline and print smoke-test outputs."""

    print("=" * 70)
    print("  INCINERATOR OPERATIONS DASHBOARD")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Parse operator text
    # ------------------------------------------------------------------
    print("[ 1 ] PARSING OPERATOR TEXT")
    print("-" * 40)

    for block in EXAMPLE_FORMAT.split("\n\n"):
        body = "\n".join(block.splitlines()[1:])
        result = parse_text(body, default_date="2026-01-22")
        print(f"\n{result.fmt}: {len(result.records)} records, {len(result.complete)} complete")
        for record in result.records:
            errors = validate_record(record)
            status = "OK" if not errors else "; ".join(e.message for e in errors)
            print(f"  {record.date} {record.plant_name}: {status}")

    # ------------------------------------------------------------------
    # 2. Build fact tables
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] BUILDING FACT TABLES")
    print("-" * 40)

    records = generate_plant_records("2026-01-01", 30)
    downtimes = generate_downtimes("2026-01-01")

    fact_daily = build_fact_daily_plant(records)
    print(f"\nfact_daily_plant: {len(fact_daily)} rows")
    print(fact_daily.head(8).to_string(index=False))

    daily_totals = build_daily_totals(fact_daily)
    print(f"\ndaily totals: {len(daily_totals)} rows")
    print(daily_totals.tail(7).to_string(index=False))

    # ------------------------------------------------------------------
    # 3. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    selected = "2026-01-06"
    overview = get_dashboard_overview(records, selected, downtimes)
    summary = overview["summary"]
    averages = overview["averages"]
    trends = overview["trends"]

    print(f"\nDaily summary — {overview['date']}:")
    print(f"  Intake        {summary.total_intake:,.1f} t  (avg7 {averages.avg_intake:,.1f}, trend {_fmt(trends.intake_trend, '+.1f')}%)")
    print(f"  Incineration  {summary.total_incineration:,.1f} t  (avg7 {averages.avg_incineration:,.1f}, trend {_fmt(trends.incineration_trend, '+.1f')}%)")
    print(f"  Intake ratio  {summary.intake_ratio:.1f}%  (avg7 {averages.avg_ratio:.1f}%)")
    print(f"  Avg pit       {summary.avg_pit_storage_pct:.1f}%  (avg7 {averages.avg_pit_storage_pct:.1f}%)")
    print(f"  Furnaces      {summary.furnaces_running} running / {summary.furnaces_stopped} stopped")

    print("\nPlants:")
    for plant in summary.plants:
        print(
            f"  {plant.plant_name} | pit {plant.pit_storage_pct:6.1f}% "
            f"[{classify_pit_status(plant.pit_storage_pct):6s}] | "
            f"days to full {_fmt(plant.days_to_full)} | "
            f"t/furnace {_fmt(plant.per_furnace_efficiency)}"
        )

    print("\nAlerts:")
    for alert in overview["alerts"]:
        print(f"  [{alert.level}] {alert.title}: {alert.description}")

    print("\nActive downtimes:")
    for d in overview["downtimes"]:
        problems = format_validation_errors(validate_downtime(d)) or "OK"
        print(f"  {d.downtime_type} {d.plant_name} {furnace_label(d.furnace_number)} → {d.end:%m/%d %H:%M} [{problems}]")

    print("\nTrend forecast:")
    forecast = build_trend_forecast(build_daily_totals(build_fact_daily_plant(records)))
    print(forecast.to_string(index=False))

    _, stats = get_range_statistics(records, "2026-01-01", "2026-01-15", "南區廠")
    print(f"\nRange statistics (南區廠, 1/1–1/15): {stats}")

    # ------------------------------------------------------------------
    # 4. Acceptance checks
    # ------------------------------------------------------------------
    print("\n")
    print("[ 4 ] ACCEPTANCE CRITERIA CHECKS")
    print("-" * 40)

    check1 = len(summary.plants) == 4
    print(f"\n  [{'PASS' if check1 else 'FAIL'}] Daily summary has {len(summary.plants)} plants (need 4)")

    check2 = len(get_trend_series(records)) == 7
    print(f"  [{'PASS' if check2 else 'FAIL'}] Trend series has 7 days")

    check3 = averages.days == 6
    print(f"  [{'PASS' if check3 else 'FAIL'}] Window for {selected} covers {averages.days} days (expect 6)")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main()
