#!/usr/bin/env python3
"""
Sales history and store models
"""

from sqlalchemy import Column, Integer, String, Date, DateTime, Float
from datetime import datetime
from app.core.database import Base

class SaleRecord(Base):
    """Historical sales fact; negative amounts are returns"""
    __tablename__ = "sale_records"
    
    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    brand = Column(String(255), nullable=False, index=True)
    store = Column(String(255), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

class StoreProfile(Base):
    """Consignment counter / store"""
    __tablename__ = "store_profiles"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    group = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    region = Column(String(255), nullable=True)
    credit_term = Column(Integer, nullable=False, default=30)
    risk_status = Column(String(20), nullable=False, default="Low")
    carried_brands = Column(String(1024), nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    @property
    def brand_list(self):
        """Carried brands as a list"""
        return [b for b in (self.carried_brands or "").split(",") if b]
