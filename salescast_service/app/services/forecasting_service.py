#!/usr/bin/env python3
"""
Forecasting service - brand-level forecasting and top-down store allocation
"""

import logging
import math
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.schemas.forecast import (
    BrandForecastOutput,
    BrandForecastResult,
    BrandMonthPrediction,
    ForecastOptions,
    ForecastRecord,
    ForecastResponse,
    OverrideKey
)
from app.schemas.sales import SalesRecord
from app.services.ai_service import GeminiClient
from app.services.exceptions import ForecastGenerationError

logger = logging.getLogger(__name__)

LOCAL_RATIONALE = "Statistical projection based on historical average + 5% growth."
LOCAL_SUMMARY = "Forecast generated using statistical analysis of historical averages (Manual Mode)."
FALLBACK_SUMMARY = "AI generation failed. Switched to statistical backup."
OVERRIDE_SUFFIX = " (Manual Override)"

HISTORY_COLUMNS = ["date", "brand", "store", "amount"]

class ForecastingEngine:
    """Brand forecasting and market-share allocation"""

    @staticmethod
    def history_to_frame(history: Iterable[SalesRecord]) -> pd.DataFrame:
        """Convert sales records to a DataFrame"""
        df = pd.DataFrame(
            [(r.date, r.brand, r.store, float(r.amount)) for r in history],
            columns=HISTORY_COLUMNS
        )
        df['date'] = pd.to_datetime(df['date'])
        return df

    @staticmethod
    def aggregate_monthly_brand_totals(history: Iterable[SalesRecord]) -> Dict[str, Dict[str, float]]:
        """Sum amounts per brand and calendar month (YYYY-MM)"""
        df = ForecastingEngine.history_to_frame(history)
        if df.empty:
            return {}

        df['month'] = df['date'].dt.strftime('%Y-%m')
        grouped = df.groupby(['brand', 'month'])['amount'].sum()

        totals: Dict[str, Dict[str, float]] = {}
        for (brand, month), amount in grouped.items():
            totals.setdefault(brand, {})[month] = float(amount)
        return totals

    @staticmethod
    def generate_local_brand_forecasts(
        history: Iterable[SalesRecord],
        target_year: int,
        brands: Optional[Iterable[str]] = None
    ) -> BrandForecastOutput:
        """
        Seasonal average forecast per brand and calendar month.

        Amounts are grouped by (brand, month of year) regardless of year and
        averaged. A month without observations uses the brand's overall
        average, and a brand without any history forecasts 0. The average is
        scaled by the growth factor and floored.
        """
        df = ForecastingEngine.history_to_frame(history)
        brand_names = set(brands or [])

        monthly_means: Dict[tuple, float] = {}
        brand_means: Dict[str, float] = {}
        if not df.empty:
            df['month'] = df['date'].dt.month
            monthly_means = df.groupby(['brand', 'month'])['amount'].mean().to_dict()
            brand_means = df.groupby('brand')['amount'].mean().to_dict()
            brand_names.update(df['brand'].unique())

        predictions = []
        for brand in sorted(brand_names):
            for month in range(1, 13):
                avg = monthly_means.get((brand, month))
                if avg is None:
                    avg = brand_means.get(brand, 0.0)
                predictions.append(BrandMonthPrediction(
                    brand=brand,
                    month=month,
                    forecast_amount=math.floor(avg * settings.LOCAL_GROWTH_FACTOR),
                    rationale=LOCAL_RATIONALE
                ))

        logger.debug(f"Local forecast for {target_year}: {len(brand_names)} brands")
        return BrandForecastOutput(predictions=predictions, summary=LOCAL_SUMMARY)

    @staticmethod
    def calculate_recent_shares(
        history: Iterable[SalesRecord],
        as_of: Optional[date] = None
    ) -> Dict[str, Dict[str, float]]:
        """
        Each store's share of its brand's trailing-twelve-month sales.

        The window ends at ``as_of`` or, by default, the latest sale date.
        When no sale falls inside the window the whole history is used.
        Brands whose total is zero or negative get an empty mapping.
        """
        df = ForecastingEngine.history_to_frame(history)
        if df.empty:
            return {}

        anchor = pd.Timestamp(as_of) if as_of is not None else df['date'].max()
        cutoff = anchor - pd.DateOffset(years=1)

        recent = df[df['date'] >= cutoff]
        if recent.empty:
            logger.info("No sales in the last twelve months, using full history for shares")
            recent = df

        brand_totals = recent.groupby('brand')['amount'].sum()
        store_totals = recent.groupby(['brand', 'store'])['amount'].sum()

        shares: Dict[str, Dict[str, float]] = {brand: {} for brand in brand_totals.index}
        for (brand, store), amount in store_totals.items():
            total = brand_totals[brand]
            if total > 0:
                shares[brand][store] = float(amount) / float(total)
        return shares

    @staticmethod
    def allocate_forecasts(
        output: BrandForecastOutput,
        shares: Dict[str, Dict[str, float]],
        target_year: int,
        overrides: Optional[Dict[OverrideKey, float]] = None
    ) -> List[ForecastRecord]:
        """Distribute brand-month totals to stores and apply manual overrides"""
        overrides = overrides or {}
        records = []

        for prediction in output.predictions:
            month_key = f"{target_year}-{prediction.month:02d}"
            for store, share in sorted(shares.get(prediction.brand, {}).items()):
                if share == 0:
                    continue

                key = OverrideKey(month_key, prediction.brand, store)
                amount = math.floor(prediction.forecast_amount * share)
                rationale = prediction.rationale

                if key in overrides:
                    amount = overrides[key]
                    rationale = f"{rationale}{OVERRIDE_SUFFIX}"

                records.append(ForecastRecord(
                    month=month_key,
                    brand=prediction.brand,
                    store=store,
                    forecast_amount=amount,
                    rationale=rationale
                ))

        return records

    @staticmethod
    def merge_predictions(base: BrandForecastOutput, preferred: BrandForecastOutput) -> BrandForecastOutput:
        """Overlay preferred predictions on base, one prediction per (brand, month)"""
        merged = {(p.brand, p.month): p for p in base.predictions}
        for prediction in preferred.predictions:
            merged[(prediction.brand, prediction.month)] = prediction

        return BrandForecastOutput(
            predictions=[merged[key] for key in sorted(merged)],
            summary=preferred.summary
        )

    @staticmethod
    async def generate_forecast(
        history: List[SalesRecord],
        target_year: int,
        options: Optional[ForecastOptions] = None,
        client=None
    ) -> ForecastResponse:
        """
        Produce store-level forecasts for every month of ``target_year``.

        Brand totals come from the external model when requested and
        configured, otherwise from the local statistical forecaster. A failed
        model call falls back to the local forecaster and the summary says so.
        Only a failure of the local path as well raises ForecastGenerationError.
        """
        options = options or ForecastOptions()
        if client is None:
            client = GeminiClient()

        model_output: Optional[BrandForecastOutput] = None
        fallback = False

        if options.use_external_model and client.is_configured:
            logger.info(f"Requesting brand forecasts for {target_year} from external model")
            result = await ForecastingEngine._request_external_forecast(client, history, target_year)
            if result.ok:
                model_output = result.output
            else:
                logger.warning(f"AI forecast failed, falling back to local: {result.error}")
                fallback = True
        else:
            logger.info("Using local statistical forecast (AI bypassed).")

        try:
            local_output = ForecastingEngine.generate_local_brand_forecasts(
                history, target_year, options.brands
            )
        except Exception as e:
            if model_output is None:
                raise ForecastGenerationError(f"Local forecast failed: {e}") from e
            logger.warning(f"Local forecast failed, using model output only: {e}")
            local_output = None

        if model_output is None:
            output = local_output
            if fallback:
                output = output.model_copy(update={"summary": FALLBACK_SUMMARY})
        elif local_output is not None:
            output = ForecastingEngine.merge_predictions(local_output, model_output)
        else:
            output = model_output

        try:
            shares = ForecastingEngine.calculate_recent_shares(history)
            forecasts = ForecastingEngine.allocate_forecasts(
                output, shares, target_year, options.overrides
            )
        except Exception as e:
            raise ForecastGenerationError(f"Allocation failed: {e}") from e

        logger.info(f"Generated {len(forecasts)} forecast records for {target_year}")
        return ForecastResponse(
            target_year=target_year,
            forecasts=forecasts,
            summary=output.summary,
            used_external_model=model_output is not None
        )

    @staticmethod
    async def _request_external_forecast(client, history: List[SalesRecord], target_year: int) -> BrandForecastResult:
        try:
            monthly_totals = ForecastingEngine.aggregate_monthly_brand_totals(history)
            store_count = len({r.store for r in history})
        except Exception as e:
            return BrandForecastResult(error=f"Could not aggregate history: {e}")

        return await run_in_threadpool(client.forecast_brands, monthly_totals, target_year, store_count)
