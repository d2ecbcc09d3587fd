import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.schemas.forecast import (
    BrandForecastOutput,
    BrandForecastResult,
    BrandMonthPrediction,
    ForecastOptions,
    OverrideKey,
)
from app.services.ai_service import GeminiClient
from app.services.exceptions import ForecastGenerationError
from app.services.forecasting_service import (
    FALLBACK_SUMMARY,
    LOCAL_SUMMARY,
    OVERRIDE_SUFFIX,
    ForecastingEngine,
)


def run(history, target_year=2025, options=None, client=None):
    return asyncio.run(ForecastingEngine.generate_forecast(history, target_year, options, client))


def raw_gemini_response(text):
    response = MagicMock()
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return response


def model_client(result):
    client = MagicMock()
    client.is_configured = True
    client.forecast_brands.return_value = result
    return client


def by_key(response):
    return {(r.month, r.brand, r.store): r for r in response.forecasts}


def test_local_mode_does_not_call_the_model(two_store_history):
    client = model_client(BrandForecastResult(error="unused"))

    response = run(two_store_history, client=client)

    client.forecast_brands.assert_not_called()
    assert response.summary == LOCAL_SUMMARY
    assert response.used_external_model is False
    assert len(response.forecasts) == 24


def test_missing_credential_behaves_as_local(two_store_history):
    options = ForecastOptions(use_external_model=True)

    with patch("app.services.ai_service.requests.post") as post:
        response = run(two_store_history, options=options, client=GeminiClient(api_key=""))

    post.assert_not_called()
    assert response.summary == LOCAL_SUMMARY


@pytest.mark.parametrize("amount_literal", ["NaN", "Infinity", "-Infinity", "1e400"])
def test_non_finite_model_amount_falls_back(two_store_history, amount_literal):
    text = (
        '{"brandForecasts": [{"brand": "Z", "monthlyPredictions": '
        '[{"month": 3, "forecastAmount": ' + amount_literal + '}]}], "summary": "Model outlook"}'
    )
    options = ForecastOptions(use_external_model=True)

    with patch("app.services.ai_service.requests.post", return_value=raw_gemini_response(text)):
        response = run(two_store_history, options=options, client=GeminiClient(api_key="test-key"))

    assert response.summary == FALLBACK_SUMMARY
    assert response.used_external_model is False
    assert by_key(response)[("2025-03", "Z", "A")].forecast_amount == 183


def test_model_failure_falls_back_to_statistical_forecast(two_store_history):
    options = ForecastOptions(use_external_model=True)

    with patch("app.services.ai_service.requests.post", side_effect=requests.ConnectionError("down")):
        response = run(two_store_history, options=options, client=GeminiClient(api_key="test-key"))

    assert response.summary == FALLBACK_SUMMARY
    assert response.used_external_model is False
    assert response.forecasts


def test_model_predictions_are_allocated_and_gaps_filled(two_store_history):
    output = BrandForecastOutput(
        predictions=[BrandMonthPrediction(brand="Z", month=3, forecast_amount=1000, rationale="Spring launch")],
        summary="Model outlook",
    )
    client = model_client(BrandForecastResult(output=output))

    response = run(two_store_history, options=ForecastOptions(use_external_model=True), client=client)
    records = by_key(response)

    client.forecast_brands.assert_called_once_with({"Z": {"2024-03": 500.0, "2024-06": 500.0}}, 2025, 2)
    assert response.summary == "Model outlook"
    assert response.used_external_model is True
    assert records[("2025-03", "Z", "A")].forecast_amount == 700
    assert records[("2025-03", "Z", "B")].forecast_amount == 300
    assert records[("2025-03", "Z", "A")].rationale == "Spring launch"
    # June comes from the local forecaster: floor(250 * 1.05) = 262
    assert records[("2025-06", "Z", "A")].forecast_amount == 183
    assert len(records) == 24


def test_overrides_apply_to_generated_forecast(two_store_history):
    options = ForecastOptions(overrides={OverrideKey("2025-01", "Z", "A"): 5000})

    response = run(two_store_history, options=options)
    record = by_key(response)[("2025-01", "Z", "A")]

    assert record.forecast_amount == 5000
    assert record.rationale.endswith(OVERRIDE_SUFFIX)


def test_catalogue_brand_without_history_gets_no_records(two_store_history):
    response = run(two_store_history, options=ForecastOptions(brands=["Ghost"]))

    assert not [r for r in response.forecasts if r.brand == "Ghost"]


def test_local_failure_without_model_output_is_terminal(two_store_history):
    with patch.object(
        ForecastingEngine, "generate_local_brand_forecasts", side_effect=RuntimeError("bad input")
    ):
        with pytest.raises(ForecastGenerationError):
            run(two_store_history)


def test_local_failure_with_model_output_uses_model_only(two_store_history):
    output = BrandForecastOutput(
        predictions=[BrandMonthPrediction(brand="Z", month=3, forecast_amount=1000)],
        summary="Model outlook",
    )
    client = model_client(BrandForecastResult(output=output))

    with patch.object(
        ForecastingEngine, "generate_local_brand_forecasts", side_effect=RuntimeError("bad input")
    ):
        response = run(two_store_history, options=ForecastOptions(use_external_model=True), client=client)

    assert sorted(by_key(response)) == [("2025-03", "Z", "A"), ("2025-03", "Z", "B")]


def test_empty_history_returns_empty_forecast():
    response = run([])

    assert response.forecasts == []
    assert response.summary == LOCAL_SUMMARY
