import pytest

from app.schemas.forecast import ForecastRecord, OverrideKey
from app.services.planning_service import PlanningService
from factories import sale

HISTORY = [
    sale("2023-03-01", "Z", "A", 150),
    sale("2024-03-01", "Z", "A", 250),
    sale("2024-03-20", "Z", "A", 150),
    sale("2024-03-20", "Z", "B", 999),
    sale("2024-06-01", "Z", "A", 300),
]


def table(targets=None, forecasts=None, margin=40.0, cover=1.5):
    return PlanningService.build_planning_table(
        history=HISTORY,
        forecasts=forecasts or [],
        targets=targets or {},
        brand="Z",
        store="A",
        year=2025,
        margin=margin,
        stock_cover_months=cover,
    )


def test_monthly_history_sums_matching_sales():
    assert PlanningService.get_monthly_history(HISTORY, "Z", "A", 2024, 3) == 400
    assert PlanningService.get_monthly_history(HISTORY, "Z", "A", 2024, 4) == 0


def test_rows_combine_forecast_target_and_history():
    forecasts = [ForecastRecord(month="2025-03", brand="Z", store="A", forecast_amount=420)]
    targets = {OverrideKey("2025-03", "Z", "A"): 500}

    result = table(targets=targets, forecasts=forecasts, margin=25)
    march = result.rows[2]

    assert [row.month_index for row in result.rows] == list(range(1, 13))
    assert march.month_key == "2025-03"
    assert march.month_name == "Mar"
    assert march.forecast == 420
    assert march.target == 500
    assert march.budget == pytest.approx(375)
    assert march.ly == 400
    assert march.lly == 150
    assert march.variance == 80


def test_totals_and_stock_requirement():
    targets = {
        OverrideKey("2025-03", "Z", "A"): 600,
        OverrideKey("2025-06", "Z", "A"): 600,
    }

    result = table(targets=targets, margin=50, cover=2)

    assert result.totals.target == 1200
    assert result.totals.ly == 700
    assert result.totals.lly == 150
    assert result.totals.budget == pytest.approx(600)
    # 100 average monthly target, at 50% cost, for two months
    assert result.required_stock_value == pytest.approx(100)


@pytest.mark.parametrize("preset, march, june", [
    ("ly", 400, 300),
    ("ly_plus_10", 440, 330),
    ("ly_plus_20", 480, 360),
])
def test_quick_targets_from_last_year(preset, march, june):
    targets = PlanningService.quick_targets(table(), preset)

    assert len(targets) == 12
    assert targets[OverrideKey("2025-03", "Z", "A")] == march
    assert targets[OverrideKey("2025-06", "Z", "A")] == june
    assert targets[OverrideKey("2025-01", "Z", "A")] == 0


def test_quick_targets_from_forecast():
    forecasts = [ForecastRecord(month="2025-07", brand="Z", store="A", forecast_amount=777)]

    targets = PlanningService.quick_targets(table(forecasts=forecasts), "ai")

    assert targets[OverrideKey("2025-07", "Z", "A")] == 777


def test_unknown_preset_is_rejected():
    with pytest.raises(ValueError):
        PlanningService.quick_targets(table(), "ly_plus_50")
