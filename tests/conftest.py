import pytest

from incinerator_dashboard.models import OperationalRecord


@pytest.fixture
def make_record():
    def _make(**overrides):
        values = dict(
            date="2024-03-01",
            plant_name="中區廠",
            furnace_count=2,
            total_intake=100.0,
            incineration_amount=90.0,
            pit_storage=400.0,
            pit_capacity=1000.0,
        )
        values.update(overrides)
        return OperationalRecord(**values)

    return _make


@pytest.fixture
def two_day_records(make_record):
    return [
        make_record(date="2024-03-01", plant_name="中區廠", total_intake=100.0,
                    incineration_amount=50.0, pit_storage=400.0, pit_capacity=1000.0),
        make_record(date="2024-03-01", plant_name="南區廠", total_intake=100.0,
                    incineration_amount=0.0, pit_storage=720.0, pit_capacity=1200.0),
        make_record(date="2024-03-02", plant_name="中區廠", total_intake=300.0,
                    incineration_amount=300.0, pit_storage=200.0, pit_capacity=1000.0),
    ]
