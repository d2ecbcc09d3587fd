#!/usr/bin/env python3
"""
Root-level API routes
"""

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Root"])

@router.get("/")
@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "message": f"{settings.APP_TITLE} is running",
        "status": "healthy",
        "version": settings.APP_VERSION,
        "external_model_enabled": settings.external_model_enabled
    }
