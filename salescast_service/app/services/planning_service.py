#!/usr/bin/env python3
"""
Planning service - targets, budgets and stock cover
"""

import calendar
import math
from typing import Dict, Iterable, List

from app.schemas.forecast import ForecastRecord, OverrideKey
from app.schemas.planning import PlanningRow, PlanningTableResponse, PlanningTotals
from app.schemas.sales import SalesRecord

QUICK_TARGET_PRESETS = ("ly", "ly_plus_10", "ly_plus_20", "ai")

class PlanningService:
    """Builds planning tables from history, forecasts and targets"""

    @staticmethod
    def get_monthly_history(
        history: Iterable[SalesRecord],
        brand: str,
        store: str,
        year: int,
        month: int
    ) -> float:
        """Total sales of a brand at a store in one calendar month"""
        return sum(
            r.amount for r in history
            if r.brand == brand and r.store == store
            and r.date.year == year and r.date.month == month
        )

    @staticmethod
    def build_planning_table(
        history: List[SalesRecord],
        forecasts: List[ForecastRecord],
        targets: Dict[OverrideKey, float],
        brand: str,
        store: str,
        year: int,
        margin: float,
        stock_cover_months: float
    ) -> PlanningTableResponse:
        """Twelve-month plan for one brand at one store"""
        forecast_by_month = {
            f.month: f.forecast_amount for f in forecasts
            if f.brand == brand and f.store == store
        }
        cost_ratio = 1 - margin / 100

        rows = []
        totals = PlanningTotals()
        for month in range(1, 13):
            month_key = f"{year}-{month:02d}"
            forecast = forecast_by_month.get(month_key, 0.0)
            target = targets.get(OverrideKey(month_key, brand, store), 0.0)
            row = PlanningRow(
                month_index=month,
                month_key=month_key,
                month_name=calendar.month_abbr[month],
                forecast=forecast,
                target=target,
                budget=target * cost_ratio,
                ly=PlanningService.get_monthly_history(history, brand, store, year - 1, month),
                lly=PlanningService.get_monthly_history(history, brand, store, year - 2, month),
                variance=target - forecast
            )
            rows.append(row)

            totals.target += row.target
            totals.forecast += row.forecast
            totals.budget += row.budget
            totals.ly += row.ly
            totals.lly += row.lly

        # Inventory value needed to hold the target stock cover at cost
        required_stock_value = (totals.target / 12) * cost_ratio * stock_cover_months

        return PlanningTableResponse(
            brand=brand,
            store=store,
            year=year,
            margin=margin,
            stock_cover_months=stock_cover_months,
            required_stock_value=required_stock_value,
            rows=rows,
            totals=totals
        )

    @staticmethod
    def quick_targets(table: PlanningTableResponse, preset: str) -> Dict[OverrideKey, float]:
        """Target amounts for every month of a planning table from a preset"""
        if preset not in QUICK_TARGET_PRESETS:
            raise ValueError(f"Unknown quick target preset: {preset}")

        targets = {}
        for row in table.rows:
            if preset == "ly":
                amount = row.ly
            elif preset == "ly_plus_10":
                amount = math.floor(row.ly * 1.10)
            elif preset == "ly_plus_20":
                amount = math.floor(row.ly * 1.20)
            else:
                amount = row.forecast
            targets[OverrideKey(row.month_key, table.brand, table.store)] = amount
        return targets
