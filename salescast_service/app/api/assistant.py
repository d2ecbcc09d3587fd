#!/usr/bin/env python3
"""
Business assistant API routes
"""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories.sales_repository import get_sales_history, get_all_stores
from app.schemas.chat import AskRequest, AskResponse
from app.services.ai_service import GeminiClient
from app.services.snapshot_service import build_snapshot

router = APIRouter(prefix="/assistant", tags=["Assistant"])

@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest, db: Session = Depends(get_db)):
    """Answer a business question from a snapshot of the data"""
    snapshot = request.snapshot or build_snapshot(
        get_sales_history(db),
        get_all_stores(db),
        total_inventory_value=request.total_inventory_value,
        total_overdue=request.total_overdue
    )
    
    answer = await run_in_threadpool(GeminiClient().ask_business_question, request.query, snapshot)
    return AskResponse(answer=answer)
