#!/usr/bin/env python3
"""
Planning configuration repository
"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from app.models.planning import ForecastOverride, BrandMargin, StockCoverTarget
from app.schemas.forecast import OverrideKey

def get_all_overrides(db: Session) -> List[ForecastOverride]:
    """Get all override rows"""
    return db.query(ForecastOverride).order_by(
        ForecastOverride.month, ForecastOverride.brand, ForecastOverride.store
    ).all()

def get_overrides_map(db: Session) -> Dict[OverrideKey, float]:
    """Overrides keyed by (month, brand, store)"""
    return {
        OverrideKey(row.month, row.brand, row.store): row.amount
        for row in get_all_overrides(db)
    }

def get_override(db: Session, key: OverrideKey) -> Optional[ForecastOverride]:
    """Get override for one cell"""
    return db.query(ForecastOverride).filter(
        ForecastOverride.month == key.month,
        ForecastOverride.brand == key.brand,
        ForecastOverride.store == key.store
    ).first()

def set_override(db: Session, key: OverrideKey, amount: float, commit: bool = True) -> ForecastOverride:
    """Create or update the override for one cell"""
    override = get_override(db, key)
    
    if override:
        override.amount = amount
    else:
        override = ForecastOverride(month=key.month, brand=key.brand, store=key.store, amount=amount)
        db.add(override)
    
    if commit:
        db.commit()
        db.refresh(override)
    return override

def set_overrides(db: Session, overrides: Dict[OverrideKey, float]) -> int:
    """Create or update several overrides in one transaction"""
    for key, amount in overrides.items():
        set_override(db, key, amount, commit=False)
        db.flush()
    db.commit()
    return len(overrides)

def delete_override(db: Session, key: OverrideKey) -> bool:
    """Delete override for one cell"""
    override = get_override(db, key)
    
    if override:
        db.delete(override)
        db.commit()
        return True
    return False

def get_margin(db: Session, brand: str) -> Optional[float]:
    """Get margin percentage for a brand"""
    row = db.query(BrandMargin).filter(BrandMargin.brand == brand).first()
    return row.margin if row else None

def set_margin(db: Session, brand: str, margin: float) -> BrandMargin:
    """Create or update brand margin"""
    row = db.query(BrandMargin).filter(BrandMargin.brand == brand).first()
    
    if row:
        row.margin = margin
    else:
        row = BrandMargin(brand=brand, margin=margin)
        db.add(row)
    
    db.commit()
    db.refresh(row)
    return row

def get_stock_cover(db: Session, brand: str, store: str) -> Optional[float]:
    """Get target stock cover months"""
    row = db.query(StockCoverTarget).filter(
        StockCoverTarget.brand == brand,
        StockCoverTarget.store == store
    ).first()
    return row.months if row else None

def set_stock_cover(db: Session, brand: str, store: str, months: float) -> StockCoverTarget:
    """Create or update target stock cover"""
    row = db.query(StockCoverTarget).filter(
        StockCoverTarget.brand == brand,
        StockCoverTarget.store == store
    ).first()
    
    if row:
        row.months = months
    else:
        row = StockCoverTarget(brand=brand, store=store, months=months)
        db.add(row)
    
    db.commit()
    db.refresh(row)
    return row
