#!/usr/bin/env python3
"""
Store profile API routes
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.core.database import get_db
from app.models.sales import StoreProfile
from app.repositories.sales_repository import (
    create_store,
    get_store_by_name,
    get_all_stores,
    delete_store
)
from app.schemas.sales import StoreCreate, StoreResponse
from app.utils.response import success_response

router = APIRouter(prefix="/stores", tags=["Stores"])

def to_response(store: StoreProfile) -> StoreResponse:
    return StoreResponse(
        id=store.id,
        name=store.name,
        group=store.group,
        city=store.city,
        region=store.region,
        credit_term=store.credit_term,
        risk_status=store.risk_status,
        carried_brands=store.brand_list
    )

@router.post("", response_model=StoreResponse)
async def add_store(request: StoreCreate, db: Session = Depends(get_db)):
    """Create a store profile"""
    if get_store_by_name(db, request.name):
        raise HTTPException(status_code=400, detail=f"Store '{request.name}' already exists")
    
    store = create_store(db, **request.model_dump())
    return to_response(store)

@router.get("", response_model=List[StoreResponse])
async def list_stores(db: Session = Depends(get_db)):
    """List store profiles"""
    return [to_response(store) for store in get_all_stores(db)]

@router.get("/{name}", response_model=StoreResponse)
async def get_store(name: str, db: Session = Depends(get_db)):
    """Get a store profile"""
    store = get_store_by_name(db, name)
    
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    
    return to_response(store)

@router.delete("/{name}")
async def remove_store(name: str, db: Session = Depends(get_db)):
    """Delete a store profile"""
    if not delete_store(db, name):
        raise HTTPException(status_code=404, detail="Store not found")
    
    return success_response({"name": name}, message="Store deleted successfully")
