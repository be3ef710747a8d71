import pandas as pd
import pytest

from incinerator_dashboard.forecast import build_trend_forecast, predict_next_days


def test_linear_series_continues_the_line():
    assert predict_next_days([10, 20, 30]) == pytest.approx([40, 50, 60])


def test_constant_series_stays_flat():
    assert predict_next_days([5, 5, 5, 5], steps=2) == pytest.approx([5, 5])


@pytest.mark.parametrize("points", [[], [42.0]])
def test_too_little_history_gives_no_forecast(points):
    assert predict_next_days(points) == []


def test_falling_series_is_clamped_at_zero():
    result = predict_next_days([30, 20, 10], steps=4)
    assert result == pytest.approx([0, 0, 0, 0])
    assert all(v >= 0 for v in result)


def test_recent_days_weigh_more():
    flat_then_jump = [10, 10, 10, 10, 10, 10, 10, 10, 10, 20]
    heavy = predict_next_days(flat_then_jump, steps=1, decay=0.5)
    light = predict_next_days(flat_then_jump, steps=1, decay=1.0)
    assert heavy[0] > light[0]


def test_build_trend_forecast_dates_follow_history():
    daily_totals = pd.DataFrame({
        "date": pd.to_datetime(["2024-03-01", "2024-03-02", "2024-03-03"]),
        "total_intake": [100.0, 110.0, 120.0],
        "total_incineration": [90.0, 90.0, 90.0],
        "avg_pit_storage_pct": [50.0, 52.0, 54.0],
    })
    forecast = build_trend_forecast(daily_totals, days=3)

    assert list(forecast["date"].dt.strftime("%Y-%m-%d")) == ["2024-03-04", "2024-03-05", "2024-03-06"]
    assert forecast["total_intake"].tolist() == pytest.approx([130.0, 140.0, 150.0])
    assert forecast["total_incineration"].tolist() == pytest.approx([90.0, 90.0, 90.0])


def test_build_trend_forecast_needs_two_days():
    daily_totals = pd.DataFrame({
        "date": pd.to_datetime(["2024-03-01"]),
        "total_intake": [100.0],
        "total_incineration": [90.0],
        "avg_pit_storage_pct": [50.0],
    })
    assert build_trend_forecast(daily_totals).empty
