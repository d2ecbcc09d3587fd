"""Pytest configuration for the SalesCast service test suite."""

import os
import sys
import tempfile
from pathlib import Path

# The service uses top-level ``app`` imports, as when run from its own directory
SERVICE_DIR = Path(__file__).resolve().parent.parent / "salescast_service"
if str(SERVICE_DIR) not in sys.path:
    sys.path.insert(0, str(SERVICE_DIR))

# Must be set before the app reads its settings
_DB_DIR = tempfile.mkdtemp(prefix="salescast-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/salescast.db"
os.environ["GEMINI_API_KEY"] = ""
os.environ["API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from app import models  # noqa: F401
from app.core.database import Base, SessionLocal, engine
from factories import sale


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from main import app as fastapi_app

    with TestClient(fastapi_app) as test_client:
        yield test_client


@pytest.fixture
def two_store_history():
    """Brand Z at stores A and B with a 70/30 split in the last year."""
    return [
        sale("2024-03-10", "Z", "A", 400),
        sale("2024-06-10", "Z", "A", 300),
        sale("2024-03-12", "Z", "B", 100),
        sale("2024-06-12", "Z", "B", 200),
    ]
