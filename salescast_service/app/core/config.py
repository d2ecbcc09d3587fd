#!/usr/bin/env python3
"""
Application configuration with environment variables
"""

import os
from typing import Optional
from pydantic import BaseModel

class Settings(BaseModel):
    """Application settings"""
    
    # Database Configuration
    DB_HOST: str = os.getenv("DB_HOST", "127.0.0.1")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "root")
    DB_NAME: str = os.getenv("DB_NAME", "salescast_db")
    DATABASE_URL_OVERRIDE: Optional[str] = os.getenv("DATABASE_URL")
    
    # Gemini Configuration
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
    GEMINI_API_BASE_URL: str = os.getenv(
        "GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_FORECAST_MODEL: str = os.getenv("GEMINI_FORECAST_MODEL", "gemini-3-pro-preview")
    GEMINI_CHAT_MODEL: str = os.getenv("GEMINI_CHAT_MODEL", "gemini-3-pro-preview")
    GEMINI_TIMEOUT_SECONDS: float = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60"))
    GEMINI_THINKING_BUDGET: int = int(os.getenv("GEMINI_THINKING_BUDGET", "32768"))
    FORECAST_TEMPERATURE: float = 0.2
    
    # Forecasting Configuration
    LOCAL_GROWTH_FACTOR: float = 1.05
    DEFAULT_BRAND_MARGIN: float = 40.0
    DEFAULT_STOCK_COVER_MONTHS: float = 1.5
    
    # Application Configuration
    APP_TITLE: str = "SalesCast Forecasting API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    
    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL"""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def external_model_enabled(self) -> bool:
        """Whether a Gemini credential is configured"""
        return bool(self.GEMINI_API_KEY)

# Global settings instance
settings = Settings()
