#!/usr/bin/env python3
"""
Forecast run models
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from app.core.database import Base

class ForecastRun(Base):
    """Latest forecast run for a target year"""
    __tablename__ = "forecast_runs"
    
    id = Column(Integer, primary_key=True, index=True)
    target_year = Column(Integer, nullable=False, unique=True, index=True)
    summary = Column(Text, nullable=False)
    used_external_model = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    records = relationship(
        "StoredForecastRecord",
        back_populates="run",
        cascade="all, delete-orphan"
    )

class StoredForecastRecord(Base):
    """One allocated (month, brand, store) forecast cell"""
    __tablename__ = "forecast_records"
    
    id = Column(Integer, primary_key=True, index=True)
    run_id = Column(Integer, ForeignKey("forecast_runs.id"), nullable=False, index=True)
    month = Column(String(7), nullable=False)
    brand = Column(String(255), nullable=False)
    store = Column(String(255), nullable=False)
    forecast_amount = Column(Float, nullable=False)
    rationale = Column(Text, nullable=True)
    
    run = relationship("ForecastRun", back_populates="records")
