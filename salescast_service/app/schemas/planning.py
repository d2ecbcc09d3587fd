#!/usr/bin/env python3
"""
Planning schemas
"""

from pydantic import BaseModel, Field
from typing import List, Literal

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
KEY_PART_PATTERN = r"^[^|]+$"

class OverrideKeyRequest(BaseModel):
    """Schema identifying one forecast cell"""
    month: str = Field(..., pattern=MONTH_PATTERN)
    brand: str = Field(..., pattern=KEY_PART_PATTERN)
    store: str = Field(..., pattern=KEY_PART_PATTERN)

class OverrideRequest(OverrideKeyRequest):
    """Schema for setting a manual override / target"""
    amount: float

class OverrideResponse(OverrideRequest):
    """Schema for override response"""
    key: str

class MarginRequest(BaseModel):
    """Schema for setting a brand margin"""
    margin: float = Field(..., ge=0, le=100)

class MarginResponse(BaseModel):
    """Schema for brand margin response"""
    brand: str
    margin: float

class StockCoverRequest(BaseModel):
    """Schema for setting target stock cover"""
    months: float = Field(..., ge=0)

class StockCoverResponse(BaseModel):
    """Schema for stock cover response"""
    brand: str
    store: str
    months: float

class PlanningRow(BaseModel):
    """One month of the planning table"""
    month_index: int
    month_key: str
    month_name: str
    forecast: float
    target: float
    budget: float
    ly: float
    lly: float
    variance: float

class PlanningTotals(BaseModel):
    """Yearly totals of the planning table"""
    target: float = 0.0
    forecast: float = 0.0
    budget: float = 0.0
    ly: float = 0.0
    lly: float = 0.0

class PlanningTableResponse(BaseModel):
    """Schema for planning table response"""
    brand: str
    store: str
    year: int
    margin: float
    stock_cover_months: float
    required_stock_value: float
    rows: List[PlanningRow]
    totals: PlanningTotals

class QuickTargetRequest(BaseModel):
    """Schema for applying a quick target preset"""
    brand: str = Field(..., pattern=KEY_PART_PATTERN)
    store: str = Field(..., pattern=KEY_PART_PATTERN)
    year: int = Field(..., ge=1900, le=9999)
    preset: Literal["ly", "ly_plus_10", "ly_plus_20", "ai"]
