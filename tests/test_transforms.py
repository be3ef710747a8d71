import pandas as pd
import pytest

from incinerator_dashboard.models import OperationalRecord
from incinerator_dashboard.transforms import (
    DAILY_TOTALS_COLUMNS,
    FACT_DAILY_COLUMNS,
    build_daily_totals,
    build_fact_daily_plant,
    records_from_rows,
)


def test_records_from_rows_coerces_store_strings():
    rows = [
        {
            "id": "abc123",
            "date": "2024/3/1",
            "plantName": "南區廠",
            "furnaceCount": "3",
            "totalIntake": "1,200",
            "incinerationAmount": "1100.5",
            "pitStorage": "9000",
            "pitCapacity": "18000",
            "platformReserved": "",
            "createdAt": "2024-03-01T08:00:00Z",
        }
    ]
    [record] = records_from_rows(rows)

    assert record.date == "2024-03-01"
    assert record.plant_name == "南區廠"
    assert record.furnace_count == 3
    assert record.total_intake == 1200.0
    assert record.incineration_amount == 1100.5
    assert record.platform_reserved is None
    assert record.is_complete


def test_records_from_rows_keeps_rows_that_fail_to_coerce():
    records = records_from_rows([{"plantName": "北區廠", "totalIntake": "n/a"}, {}])
    assert len(records) == 2
    assert records[0].plant_name is None
    assert records[0].total_intake is None
    assert not records[1].has_data()


def test_fact_table_has_schema_and_sorted_dates(make_record):
    records = [
        make_record(date="2024-03-02", plant_name="中區廠"),
        make_record(date="2024-03-01", plant_name="南區廠", furnace_count=3),
        make_record(date="2024-03-01", plant_name="中區廠"),
    ]
    df = build_fact_daily_plant(records)

    assert list(df.columns) == FACT_DAILY_COLUMNS
    assert pd.api.types.is_datetime64_any_dtype(df["date"])
    assert df["date"].is_monotonic_increasing
    # Input order is kept within a day
    assert list(df["plant_name"]) == ["南區廠", "中區廠", "中區廠"]
    assert list(df["furnaces_stopped"]) == [1, 1, 1]
    assert df.loc[0, "pit_storage_pct"] == pytest.approx(400 / 1000 * 100)


def test_fact_table_leaves_out_incomplete_records(make_record):
    records = [make_record(), OperationalRecord(date="2024-03-01", plant_name="南區廠")]
    df = build_fact_daily_plant(records)
    assert len(df) == 1


def test_fact_table_without_complete_records_is_empty_with_schema():
    df = build_fact_daily_plant([OperationalRecord(plant_name="中區廠")])
    assert df.empty
    assert list(df.columns) == FACT_DAILY_COLUMNS


def test_daily_totals(two_day_records):
    totals = build_daily_totals(build_fact_daily_plant(two_day_records))

    assert list(totals.columns) == DAILY_TOTALS_COLUMNS
    assert len(totals) == 2

    first = totals.iloc[0]
    assert first["total_intake"] == 200.0
    assert first["total_incineration"] == 50.0
    assert first["furnaces_running"] == 4
    assert first["furnaces_stopped"] == 3
    assert first["avg_pit_storage_pct"] == pytest.approx(50.0)
    assert first["plant_count"] == 2

    assert totals.iloc[1]["avg_pit_storage_pct"] == pytest.approx(20.0)


def test_daily_totals_of_empty_fact_table():
    totals = build_daily_totals(build_fact_daily_plant([]))
    assert totals.empty
    assert list(totals.columns) == DAILY_TOTALS_COLUMNS
