from datetime import datetime

from incinerator_dashboard.models import DowntimeRecord, OperationalRecord
from incinerator_dashboard.validators import (
    format_validation_errors,
    validate_date_range,
    validate_downtime,
    validate_record,
)


def _fields(errors):
    return [e.field for e in errors]


def test_complete_record_is_valid(make_record):
    assert validate_record(make_record()) == []


def test_empty_record_lists_every_required_field():
    errors = validate_record(OperationalRecord())
    assert _fields(errors) == [
        "date", "plant_name", "furnace_count",
        "total_intake", "incineration_amount", "pit_storage", "pit_capacity",
    ]
    assert errors[0].message == "日期為必填欄位"


def test_bad_values_are_reported(make_record):
    record = make_record(
        date="2024/03/01",
        plant_name="北區廠",
        furnace_count=-1,
        total_intake=-5.0,
        pit_capacity=0.0,
        adjusted_trips=-2,
    )
    errors = validate_record(record)
    assert _fields(errors) == [
        "date", "plant_name", "furnace_count", "total_intake", "pit_capacity", "adjusted_trips",
    ]
    assert "YYYY-MM-DD" in errors[0].message
    assert errors[-1].message == "調整車次不可為負數"


def test_fractional_furnace_count_is_rejected(make_record):
    errors = validate_record(make_record(furnace_count=2.5))
    assert _fields(errors) == ["furnace_count"]


def test_storage_above_capacity_is_allowed(make_record):
    assert validate_record(make_record(pit_storage=1500.0, pit_capacity=1000.0)) == []


def test_zero_values_are_not_missing(make_record):
    record = make_record(furnace_count=0, total_intake=0.0, incineration_amount=0.0, pit_storage=0.0)
    assert validate_record(record) == []


def test_date_range():
    assert validate_date_range("2024-03-01", "2024-03-31") == []
    assert validate_date_range(None, None) == []
    assert _fields(validate_date_range("2024-03-31", "2024-03-01")) == ["date_range"]
    assert _fields(validate_date_range("3/1", "2024-03-01")) == ["start_date"]
    assert _fields(validate_date_range("2024-03-01", "2024/3/5")) == ["end_date"]


def test_format_validation_errors():
    errors = validate_record(OperationalRecord(date="2024-03-01", plant_name="中區廠", furnace_count=1,
                                               total_intake=1.0, incineration_amount=1.0, pit_storage=1.0))
    assert format_validation_errors(errors) == "貯坑容量為必填欄位"


def _downtime(**overrides):
    values = dict(
        plant_name="岡山廠",
        furnace_number=1,
        downtime_type="臨時停機",
        start=datetime(2024, 3, 4, 8, 0),
        end=datetime(2024, 3, 4, 20, 0),
    )
    values.update(overrides)
    return DowntimeRecord(**values)


def test_valid_downtime():
    assert validate_downtime(_downtime()) == []


def test_downtime_furnace_must_exist_at_plant():
    errors = validate_downtime(_downtime(plant_name="中區廠", furnace_number=4))
    assert _fields(errors) == ["furnace_number"]
    assert validate_downtime(_downtime(plant_name="南區廠", furnace_number=4)) == []


def test_downtime_bad_entries():
    errors = validate_downtime(_downtime(
        plant_name="北區廠",
        downtime_type="其他",
        end=datetime(2024, 3, 4, 7, 0),
    ))
    assert _fields(errors) == ["plant_name", "downtime_type", "end"]


def test_downtime_needs_both_times():
    errors = validate_downtime(_downtime(end=None))
    assert format_validation_errors(errors) == "請填寫開始與結束時間"
