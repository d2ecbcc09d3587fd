#!/usr/bin/env python3
"""
Sales history and store schemas
"""

import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class SalesRecord(BaseModel):
    """Immutable historical sales fact"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    date: datetime.date
    brand: str
    store: str
    amount: float

class SalesRecordResponse(SalesRecord):
    """Schema for a stored sales record"""
    id: int

class BulkSalesRequest(BaseModel):
    """Schema for inserting sales records"""
    records: List[SalesRecord] = Field(..., min_length=1)

class MonthlyBrandTotal(BaseModel):
    """Schema for one brand's total in one month"""
    brand: str
    month: str
    total_amount: float

class StoreCreate(BaseModel):
    """Schema for creating a store profile"""
    name: str = Field(..., min_length=1)
    group: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    credit_term: int = 30
    risk_status: str = Field("Low", pattern="^(Low|Medium|High)$")
    carried_brands: List[str] = []

class StoreResponse(BaseModel):
    """Schema for store profile response"""
    id: int
    name: str
    group: Optional[str]
    city: Optional[str]
    region: Optional[str]
    credit_term: int
    risk_status: str
    carried_brands: List[str]
