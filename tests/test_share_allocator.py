from datetime import date, timedelta

import pytest

from app.services.forecasting_service import ForecastingEngine
from factories import sale


def test_shares_follow_recent_sales(two_store_history):
    shares = ForecastingEngine.calculate_recent_shares(two_store_history)

    assert shares == {"Z": {"A": pytest.approx(0.7), "B": pytest.approx(0.3)}}


def test_sales_older_than_a_year_before_latest_sale_are_ignored(two_store_history):
    history = two_store_history + [sale("2022-12-31", "Z", "C", 5000)]

    shares = ForecastingEngine.calculate_recent_shares(history)

    assert "C" not in shares["Z"]
    assert shares["Z"]["A"] == pytest.approx(0.7)


def test_window_includes_the_cutoff_day():
    history = [
        sale("2023-06-12", "Z", "A", 100),
        sale("2024-06-12", "Z", "B", 100),
    ]

    shares = ForecastingEngine.calculate_recent_shares(history)

    assert shares["Z"] == {"A": pytest.approx(0.5), "B": pytest.approx(0.5)}


def test_cold_history_falls_back_to_all_records():
    old_day = date.today() - timedelta(days=400)
    history = [
        sale(old_day, "Z", "A", 600),
        sale(old_day, "Z", "B", 400),
    ]

    shares = ForecastingEngine.calculate_recent_shares(history, as_of=date.today())

    assert shares["Z"] == {"A": pytest.approx(0.6), "B": pytest.approx(0.4)}


def test_cold_history_still_allocates_with_default_anchor():
    old_day = date.today() - timedelta(days=400)
    history = [sale(old_day, "Z", "A", 600)]

    shares = ForecastingEngine.calculate_recent_shares(history)

    assert shares == {"Z": {"A": 1.0}}


@pytest.mark.parametrize("amounts", [[100, -100], [-50, 10]])
def test_non_positive_brand_total_has_no_shares(amounts):
    history = [
        sale("2024-01-01", "R", "A", amounts[0]),
        sale("2024-01-02", "R", "B", amounts[1]),
    ]

    shares = ForecastingEngine.calculate_recent_shares(history)

    assert shares == {"R": {}}


def test_empty_history_has_no_shares():
    assert ForecastingEngine.calculate_recent_shares([]) == {}
