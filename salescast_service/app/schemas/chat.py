#!/usr/bin/env python3
"""
Business assistant schemas
"""

from pydantic import BaseModel, Field
from typing import List, Optional

class BusinessSnapshot(BaseModel):
    """Pre-aggregated business context sent to the assistant"""
    store_count: int = 0
    total_sales: float = 0.0
    total_inventory_value: float = 0.0
    total_overdue: float = 0.0
    top_stores: List[str] = []
    high_risk_stores: List[str] = []
    bottom_stores: List[str] = []

class AskRequest(BaseModel):
    """Schema for a business question"""
    query: str = Field(..., min_length=1)
    snapshot: Optional[BusinessSnapshot] = None
    total_inventory_value: float = 0.0
    total_overdue: float = 0.0

class AskResponse(BaseModel):
    """Schema for assistant answer"""
    answer: str
