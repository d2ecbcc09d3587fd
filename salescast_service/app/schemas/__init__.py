"""
Pydantic schemas for request/response validation
"""

from app.schemas.sales import (
    SalesRecord,
    SalesRecordResponse,
    BulkSalesRequest,
    MonthlyBrandTotal,
    StoreCreate,
    StoreResponse
)
from app.schemas.forecast import (
    OverrideKey,
    BrandMonthPrediction,
    BrandForecastOutput,
    BrandForecastResult,
    ForecastOptions,
    ForecastRecord,
    ForecastResponse,
    GenerateForecastRequest
)
from app.schemas.planning import (
    OverrideKeyRequest,
    OverrideRequest,
    OverrideResponse,
    MarginRequest,
    MarginResponse,
    StockCoverRequest,
    StockCoverResponse,
    PlanningRow,
    PlanningTotals,
    PlanningTableResponse,
    QuickTargetRequest
)
from app.schemas.chat import BusinessSnapshot, AskRequest, AskResponse

__all__ = [
    "SalesRecord", "SalesRecordResponse", "BulkSalesRequest", "MonthlyBrandTotal",
    "StoreCreate", "StoreResponse",
    "OverrideKey", "BrandMonthPrediction", "BrandForecastOutput", "BrandForecastResult",
    "ForecastOptions", "ForecastRecord", "ForecastResponse", "GenerateForecastRequest",
    "OverrideKeyRequest", "OverrideRequest", "OverrideResponse",
    "MarginRequest", "MarginResponse", "StockCoverRequest", "StockCoverResponse",
    "PlanningRow", "PlanningTotals", "PlanningTableResponse", "QuickTargetRequest",
    "BusinessSnapshot", "AskRequest", "AskResponse"
]
