#!/usr/bin/env python3
"""
Database configuration and session management
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI serves sync routes from a threadpool
    connect_args["check_same_thread"] = False

# Create engine
try:
    engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=connect_args)
except Exception as e:
    logger.error(f"❌ Error connecting to database: {e}")
    logger.error("Please ensure the database server is running, the database exists and credentials are correct")
    raise

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_database():
    """Initialize database tables"""
    try:
        # Test connection
        with engine.connect():
            logger.info("✅ Database connection successful!")
        
        # Import all models to ensure they're registered
        from app.models import sales, planning, forecast  # noqa: F401
        
        # Create tables
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables verified/created successfully!")
        return True
    except Exception as e:
        logger.error(f"❌ Error initializing database: {e}")
        return False
