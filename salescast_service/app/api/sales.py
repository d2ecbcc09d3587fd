#!/usr/bin/env python3
"""
Sales history API routes
"""

from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.database import get_db
from app.repositories.sales_repository import (
    save_sales_batch,
    get_sales_by_filters,
    get_sales_history,
    delete_sale
)
from app.schemas.sales import BulkSalesRequest, MonthlyBrandTotal, SalesRecordResponse
from app.services.forecasting_service import ForecastingEngine
from app.utils.response import success_response

router = APIRouter(prefix="/sales", tags=["Sales"])

@router.post("")
async def create_sales(request: BulkSalesRequest, db: Session = Depends(get_db)):
    """Insert sales records"""
    try:
        rows = save_sales_batch(db, request.records)
        return success_response(
            {"inserted": len(rows), "ids": [row.id for row in rows]},
            message="Sales records saved successfully"
        )
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error saving sales records: {str(e)}")

@router.get("", response_model=List[SalesRecordResponse])
async def list_sales(
    brand: Optional[str] = None,
    store: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """List sales records"""
    rows = get_sales_by_filters(db, brand=brand, store=store, start_date=start_date, end_date=end_date)
    return [SalesRecordResponse.model_validate(row) for row in rows]

@router.get("/monthly", response_model=List[MonthlyBrandTotal])
async def monthly_brand_totals(db: Session = Depends(get_db)):
    """Monthly totals per brand"""
    totals = ForecastingEngine.aggregate_monthly_brand_totals(get_sales_history(db))
    return [
        MonthlyBrandTotal(brand=brand, month=month, total_amount=amount)
        for brand in sorted(totals)
        for month, amount in sorted(totals[brand].items())
    ]

@router.delete("/{sale_id}")
async def remove_sale(sale_id: int, db: Session = Depends(get_db)):
    """Delete a sales record"""
    if not delete_sale(db, sale_id):
        raise HTTPException(status_code=404, detail="Sales record not found")
    
    return success_response({"id": sale_id}, message="Sales record deleted successfully")
