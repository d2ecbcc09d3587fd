#!/usr/bin/env python3
"""
Sales history and store repository
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from app.models.sales import SaleRecord, StoreProfile
from app.schemas.sales import SalesRecord

def save_sales_batch(db: Session, records: List[SalesRecord]) -> List[SaleRecord]:
    """Batch insert sales records"""
    rows = [
        SaleRecord(date=r.date, brand=r.brand, store=r.store, amount=r.amount)
        for r in records
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows

def get_sales_by_filters(
    db: Session,
    brand: Optional[str] = None,
    store: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[SaleRecord]:
    """Get sales records with filters"""
    query = db.query(SaleRecord)
    
    if brand:
        query = query.filter(SaleRecord.brand == brand)
    if store:
        query = query.filter(SaleRecord.store == store)
    if start_date:
        query = query.filter(SaleRecord.date >= start_date)
    if end_date:
        query = query.filter(SaleRecord.date <= end_date)
    
    return query.order_by(SaleRecord.date, SaleRecord.id).all()

def get_sales_history(db: Session) -> List[SalesRecord]:
    """Full sales history as immutable records"""
    return [SalesRecord.model_validate(row) for row in get_sales_by_filters(db)]

def delete_sale(db: Session, sale_id: int) -> bool:
    """Delete a sales record"""
    sale = db.query(SaleRecord).filter(SaleRecord.id == sale_id).first()
    
    if sale:
        db.delete(sale)
        db.commit()
        return True
    return False

def create_store(
    db: Session,
    name: str,
    group: Optional[str] = None,
    city: Optional[str] = None,
    region: Optional[str] = None,
    credit_term: int = 30,
    risk_status: str = "Low",
    carried_brands: Optional[List[str]] = None
) -> StoreProfile:
    """Create a store profile"""
    store = StoreProfile(
        name=name,
        group=group,
        city=city,
        region=region,
        credit_term=credit_term,
        risk_status=risk_status,
        carried_brands=",".join(carried_brands or [])
    )
    db.add(store)
    db.commit()
    db.refresh(store)
    return store

def get_store_by_name(db: Session, name: str) -> Optional[StoreProfile]:
    """Get store profile by name"""
    return db.query(StoreProfile).filter(StoreProfile.name == name).first()

def get_all_stores(db: Session) -> List[StoreProfile]:
    """Get all store profiles"""
    return db.query(StoreProfile).order_by(StoreProfile.name).all()

def delete_store(db: Session, name: str) -> bool:
    """Delete store profile"""
    store = get_store_by_name(db, name)
    
    if store:
        db.delete(store)
        db.commit()
        return True
    return False
