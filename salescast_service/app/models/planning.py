#!/usr/bin/env python3
"""
Planning configuration models
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, UniqueConstraint
from datetime import datetime
from app.core.database import Base

class ForecastOverride(Base):
    """Manual target for one (month, brand, store) cell"""
    __tablename__ = "forecast_overrides"
    
    id = Column(Integer, primary_key=True, index=True)
    month = Column(String(7), nullable=False, index=True)
    brand = Column(String(255), nullable=False)
    store = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    __table_args__ = (
        UniqueConstraint('month', 'brand', 'store', name='unique_override_cell'),
    )

class BrandMargin(Base):
    """Commission margin percentage per brand"""
    __tablename__ = "brand_margins"
    
    id = Column(Integer, primary_key=True, index=True)
    brand = Column(String(255), unique=True, nullable=False)
    margin = Column(Float, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class StockCoverTarget(Base):
    """Target months of stock cover per brand and store"""
    __tablename__ = "stock_cover_targets"
    
    id = Column(Integer, primary_key=True, index=True)
    brand = Column(String(255), nullable=False)
    store = Column(String(255), nullable=False)
    months = Column(Float, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    __table_args__ = (
        UniqueConstraint('brand', 'store', name='unique_stock_cover'),
    )
