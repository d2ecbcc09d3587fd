from app.services.forecasting_service import (
    ForecastingEngine,
    LOCAL_RATIONALE,
    LOCAL_SUMMARY,
)
from factories import sale


def by_month(output, brand):
    return {p.month: p.forecast_amount for p in output.predictions if p.brand == brand}


def test_january_average_across_years_with_growth():
    history = [
        sale("2023-01-10", "X", "A", 100),
        sale("2024-01-15", "X", "B", 200),
    ]

    output = ForecastingEngine.generate_local_brand_forecasts(history, 2025)

    assert by_month(output, "X")[1] == 157


def test_month_without_history_uses_brand_average():
    history = [sale("2024-03-05", "Y", "A", 300)]

    output = ForecastingEngine.generate_local_brand_forecasts(history, 2025)
    months = by_month(output, "Y")

    assert months[7] == 315
    assert set(months) == set(range(1, 13))
    assert all(amount == 315 for amount in months.values())


def test_brand_without_history_forecasts_zero_for_every_month():
    history = [sale("2024-03-05", "Y", "A", 300)]

    output = ForecastingEngine.generate_local_brand_forecasts(history, 2025, brands=["Ghost"])

    assert by_month(output, "Ghost") == {month: 0 for month in range(1, 13)}


def test_returns_reduce_the_average():
    history = [
        sale("2024-01-05", "X", "A", 100),
        sale("2024-01-20", "X", "A", -40),
    ]

    output = ForecastingEngine.generate_local_brand_forecasts(history, 2025)

    # mean 30, scaled by 1.05 and floored
    assert by_month(output, "X")[1] == 31


def test_one_prediction_per_brand_and_month_with_fixed_text():
    history = [
        sale("2024-01-05", "X", "A", 100),
        sale("2024-02-05", "Y", "A", 50),
        sale("2024-02-06", "Y", "B", 50),
    ]

    output = ForecastingEngine.generate_local_brand_forecasts(history, 2025)

    keys = [(p.brand, p.month) for p in output.predictions]
    assert len(keys) == 24
    assert len(set(keys)) == 24
    assert all(p.rationale == LOCAL_RATIONALE for p in output.predictions)
    assert output.summary == LOCAL_SUMMARY


def test_empty_history_produces_no_predictions():
    output = ForecastingEngine.generate_local_brand_forecasts([], 2025)

    assert output.predictions == []
    assert output.summary == LOCAL_SUMMARY
