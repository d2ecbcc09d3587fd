#!/usr/bin/env python3
"""
Forecasting API routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Dict, Optional

from app.core.database import get_db
from app.repositories.forecast_repository import (
    replace_forecast_run,
    get_forecast_run,
    get_latest_forecast_run,
    forecast_run_to_response
)
from app.repositories.planning_repository import get_overrides_map
from app.repositories.sales_repository import get_sales_history
from app.schemas.forecast import ForecastOptions, ForecastResponse, GenerateForecastRequest
from app.services.exceptions import ForecastGenerationError
from app.services.forecasting_service import ForecastingEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forecast", tags=["Forecasting"])

@router.post("/generate", response_model=ForecastResponse)
async def generate_forecast(request: GenerateForecastRequest, db: Session = Depends(get_db)):
    """Generate and store store-level forecasts for a target year"""
    try:
        history = get_sales_history(db)
        options = ForecastOptions(
            use_external_model=request.use_external_model,
            overrides=get_overrides_map(db),
            brands=request.brands
        )
        
        response = await ForecastingEngine.generate_forecast(history, request.target_year, options)
        replace_forecast_run(db, response)
        return response
    
    except ForecastGenerationError as e:
        logger.error(f"Forecast generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Generation Failed: {str(e)}")
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Forecasting error: {str(e)}")

@router.get("/latest", response_model=ForecastResponse)
async def get_latest_forecast(target_year: Optional[int] = None, db: Session = Depends(get_db)):
    """Get the stored forecast run"""
    if target_year is not None:
        run = get_forecast_run(db, target_year)
    else:
        run = get_latest_forecast_run(db)
    
    if not run:
        raise HTTPException(status_code=404, detail="No forecast has been generated")
    
    return forecast_run_to_response(run)

@router.get("/shares", response_model=Dict[str, Dict[str, float]])
async def get_store_shares(db: Session = Depends(get_db)):
    """Trailing-twelve-month store share per brand"""
    return ForecastingEngine.calculate_recent_shares(get_sales_history(db))
