#!/usr/bin/env python3
"""
Main FastAPI application with modular router structure
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import init_database
from app.core.logging_config import configure_logging
from app.api import sales, stores, forecast, planning, assistant, root

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Startup Event
@app.on_event("startup")
async def startup_event():
    configure_logging()
    logger.info(f"🚀 Starting {settings.APP_TITLE}...")
    if init_database():
        logger.info("✅ Database initialization successful!")
    else:
        logger.warning("⚠️  Database initialization failed - some features may not work")
    
    if not settings.external_model_enabled:
        logger.info("GEMINI_API_KEY not set, forecasts will use the statistical model")

# Shutdown Event
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("🛑 Shutting down application...")

# Register Routers
app.include_router(root.router)
app.include_router(sales.router)
app.include_router(stores.router)
app.include_router(forecast.router)
app.include_router(planning.router)
app.include_router(assistant.router)
