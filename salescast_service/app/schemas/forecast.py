#!/usr/bin/env python3
"""
Forecast schemas and domain records
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, NamedTuple, Optional

OVERRIDE_KEY_SEPARATOR = "|"

class OverrideKey(NamedTuple):
    """Composite key of one forecast cell"""
    month: str  # YYYY-MM
    brand: str
    store: str

    def to_string(self) -> str:
        """Serialize as "{month}|{brand}|{store}" for storage and HTTP"""
        return OVERRIDE_KEY_SEPARATOR.join(self)

    @classmethod
    def parse(cls, value: str) -> "OverrideKey":
        """Parse the "{month}|{brand}|{store}" form"""
        parts = value.split(OVERRIDE_KEY_SEPARATOR)
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Invalid override key: {value!r}")
        month = parts[0]
        if len(month) != 7 or month[4] != "-" or not (month[:4] + month[5:]).isdigit():
            raise ValueError(f"Invalid override month: {month!r}")
        if not 1 <= int(month[5:]) <= 12:
            raise ValueError(f"Invalid override month: {month!r}")
        return cls(month, parts[1], parts[2])

class BrandMonthPrediction(BaseModel):
    """Brand-level prediction for one calendar month of the target year"""
    brand: str
    month: int = Field(..., ge=1, le=12)
    forecast_amount: float
    rationale: str = ""

class BrandForecastOutput(BaseModel):
    """Output of a brand forecaster"""
    predictions: List[BrandMonthPrediction]
    summary: str

class BrandForecastResult(BaseModel):
    """Outcome of the model-backed forecaster: an output or an error"""
    output: Optional[BrandForecastOutput] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.output is not None and self.error is None

class ForecastOptions(BaseModel):
    """Options for a forecast run"""
    use_external_model: bool = False
    overrides: Dict[OverrideKey, float] = {}
    brands: List[str] = []

class ForecastRecord(BaseModel):
    """Allocated forecast for one (month, brand, store) cell"""
    model_config = ConfigDict(from_attributes=True)

    month: str
    brand: str
    store: str
    forecast_amount: float
    rationale: Optional[str] = None

class ForecastResponse(BaseModel):
    """Schema for forecast run response"""
    target_year: int
    forecasts: List[ForecastRecord]
    summary: str
    used_external_model: bool = False

class GenerateForecastRequest(BaseModel):
    """Schema for forecast generation request"""
    target_year: int = Field(..., ge=1900, le=9999)
    use_external_model: bool = False
    brands: List[str] = []
