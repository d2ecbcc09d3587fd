#!/usr/bin/env python3
"""
Forecast run repository
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.models.forecast import ForecastRun, StoredForecastRecord
from app.schemas.forecast import ForecastResponse

def replace_forecast_run(db: Session, response: ForecastResponse) -> ForecastRun:
    """Store a run, replacing any previous run for the same target year"""
    previous = get_forecast_run(db, response.target_year)
    if previous:
        db.delete(previous)
        db.flush()

    run = ForecastRun(
        target_year=response.target_year,
        summary=response.summary,
        used_external_model=response.used_external_model,
        records=[
            StoredForecastRecord(
                month=r.month,
                brand=r.brand,
                store=r.store,
                forecast_amount=r.forecast_amount,
                rationale=r.rationale
            )
            for r in response.forecasts
        ]
    )
    db.add(run)
    db.commit()
    db.refresh(run)
    return run

def get_forecast_run(db: Session, target_year: int) -> Optional[ForecastRun]:
    """Get the stored run for a target year"""
    return db.query(ForecastRun).filter(ForecastRun.target_year == target_year).first()

def get_latest_forecast_run(db: Session) -> Optional[ForecastRun]:
    """Get the most recently stored run"""
    return db.query(ForecastRun).order_by(ForecastRun.created_at.desc(), ForecastRun.id.desc()).first()

def forecast_run_to_response(run: ForecastRun) -> ForecastResponse:
    """Convert a stored run to the API response"""
    return ForecastResponse(
        target_year=run.target_year,
        forecasts=[
            {
                "month": r.month,
                "brand": r.brand,
                "store": r.store,
                "forecast_amount": r.forecast_amount,
                "rationale": r.rationale
            }
            for r in sorted(run.records, key=lambda r: (r.month, r.brand, r.store))
        ],
        summary=run.summary,
        used_external_model=run.used_external_model
    )
