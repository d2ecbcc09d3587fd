#!/usr/bin/env python3
"""
Planning API routes - overrides, margins, stock cover and planning tables
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.core.config import settings
from app.core.database import get_db
from app.repositories import planning_repository
from app.repositories.forecast_repository import get_forecast_run, forecast_run_to_response
from app.repositories.sales_repository import get_sales_history
from app.schemas.forecast import OverrideKey
from app.schemas.planning import (
    OverrideKeyRequest,
    OverrideRequest,
    OverrideResponse,
    MarginRequest,
    MarginResponse,
    StockCoverRequest,
    StockCoverResponse,
    PlanningTableResponse,
    QuickTargetRequest
)
from app.services.planning_service import PlanningService
from app.utils.response import success_response

router = APIRouter(prefix="/planning", tags=["Planning"])

def override_response(key: OverrideKey, amount: float) -> OverrideResponse:
    return OverrideResponse(
        key=key.to_string(),
        month=key.month,
        brand=key.brand,
        store=key.store,
        amount=amount
    )

@router.get("/overrides", response_model=List[OverrideResponse])
async def list_overrides(db: Session = Depends(get_db)):
    """List manual overrides / targets"""
    return [
        override_response(key, amount)
        for key, amount in planning_repository.get_overrides_map(db).items()
    ]

@router.get("/overrides/{key}", response_model=OverrideResponse)
async def get_override(key: str, db: Session = Depends(get_db)):
    """Get one override by its "{month}|{brand}|{store}" key"""
    try:
        override_key = OverrideKey.parse(key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    override = planning_repository.get_override(db, override_key)
    if not override:
        raise HTTPException(status_code=404, detail="Override not found")
    
    return override_response(override_key, override.amount)

@router.put("/overrides", response_model=OverrideResponse)
async def set_override(request: OverrideRequest, db: Session = Depends(get_db)):
    """Set the manual override for one forecast cell"""
    key = OverrideKey(request.month, request.brand, request.store)
    override = planning_repository.set_override(db, key, request.amount)
    return override_response(key, override.amount)

@router.delete("/overrides")
async def delete_override(request: OverrideKeyRequest, db: Session = Depends(get_db)):
    """Remove the manual override for one forecast cell"""
    key = OverrideKey(request.month, request.brand, request.store)
    if not planning_repository.delete_override(db, key):
        raise HTTPException(status_code=404, detail="Override not found")
    
    return success_response({"key": key.to_string()}, message="Override deleted successfully")

@router.get("/margins/{brand}", response_model=MarginResponse)
async def get_margin(brand: str, db: Session = Depends(get_db)):
    """Get brand margin, falling back to the default"""
    margin = planning_repository.get_margin(db, brand)
    return MarginResponse(brand=brand, margin=settings.DEFAULT_BRAND_MARGIN if margin is None else margin)

@router.put("/margins/{brand}", response_model=MarginResponse)
async def set_margin(brand: str, request: MarginRequest, db: Session = Depends(get_db)):
    """Set brand margin percentage"""
    row = planning_repository.set_margin(db, brand, request.margin)
    return MarginResponse(brand=row.brand, margin=row.margin)

@router.get("/stock-cover/{brand}/{store}", response_model=StockCoverResponse)
async def get_stock_cover(brand: str, store: str, db: Session = Depends(get_db)):
    """Get target stock cover, falling back to the default"""
    months = planning_repository.get_stock_cover(db, brand, store)
    return StockCoverResponse(
        brand=brand,
        store=store,
        months=settings.DEFAULT_STOCK_COVER_MONTHS if months is None else months
    )

@router.put("/stock-cover/{brand}/{store}", response_model=StockCoverResponse)
async def set_stock_cover(brand: str, store: str, request: StockCoverRequest, db: Session = Depends(get_db)):
    """Set target stock cover in months"""
    row = planning_repository.set_stock_cover(db, brand, store, request.months)
    return StockCoverResponse(brand=row.brand, store=row.store, months=row.months)

def load_planning_table(db: Session, brand: str, store: str, year: int) -> PlanningTableResponse:
    run = get_forecast_run(db, year)
    forecasts = forecast_run_to_response(run).forecasts if run else []
    
    margin = planning_repository.get_margin(db, brand)
    stock_cover = planning_repository.get_stock_cover(db, brand, store)
    
    return PlanningService.build_planning_table(
        history=get_sales_history(db),
        forecasts=forecasts,
        targets=planning_repository.get_overrides_map(db),
        brand=brand,
        store=store,
        year=year,
        margin=settings.DEFAULT_BRAND_MARGIN if margin is None else margin,
        stock_cover_months=settings.DEFAULT_STOCK_COVER_MONTHS if stock_cover is None else stock_cover
    )

@router.get("/table", response_model=PlanningTableResponse)
async def planning_table(brand: str, store: str, year: int, db: Session = Depends(get_db)):
    """Monthly forecast, target, budget and history for one brand at one store"""
    return load_planning_table(db, brand, store, year)

@router.post("/quick-targets", response_model=PlanningTableResponse)
async def apply_quick_targets(request: QuickTargetRequest, db: Session = Depends(get_db)):
    """Set a year of targets from last year's sales or the forecast"""
    try:
        table = load_planning_table(db, request.brand, request.store, request.year)
        planning_repository.set_overrides(db, PlanningService.quick_targets(table, request.preset))
        return load_planning_table(db, request.brand, request.store, request.year)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error applying targets: {str(e)}")
