#!/usr/bin/env python3
"""
Service-level exceptions
"""

class SalesCastError(Exception):
    """Base error for the forecasting service"""

class ExternalModelError(SalesCastError):
    """The external model call failed or returned unusable output"""

class ForecastGenerationError(SalesCastError):
    """Neither the external nor the local forecaster produced a result"""
