"""
Database models
"""
from app.core.database import Base
from app.models.sales import SaleRecord, StoreProfile
from app.models.planning import ForecastOverride, BrandMargin, StockCoverTarget
from app.models.forecast import ForecastRun, StoredForecastRecord

__all__ = [
    "Base",
    "SaleRecord",
    "StoreProfile",
    "ForecastOverride",
    "BrandMargin",
    "StockCoverTarget",
    "ForecastRun",
    "StoredForecastRecord"
]
