#!/usr/bin/env python3
"""
AI service - Gemini integration for brand forecasts and business Q&A
"""

import json
import logging
import math
from typing import Any, Dict, Optional

import requests

from app.core.config import settings
from app.schemas.chat import BusinessSnapshot
from app.schemas.forecast import BrandForecastOutput, BrandForecastResult, BrandMonthPrediction
from app.services.exceptions import ExternalModelError

logger = logging.getLogger(__name__)

NO_KEY_ANSWER = "API Key not configured. Please enable AI features."
EMPTY_ANSWER = "I couldn't generate an answer at this time."
FAILED_ANSWER = "Sorry, I'm having trouble connecting to the brain right now."

# Only brand-level totals are requested; store allocation happens locally
BRAND_FORECAST_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "brandForecasts": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "brand": {"type": "STRING"},
                    "monthlyPredictions": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "month": {"type": "INTEGER", "description": "1-12"},
                                "forecastAmount": {"type": "NUMBER"},
                                "rationale": {"type": "STRING"}
                            },
                            "required": ["month", "forecastAmount"]
                        }
                    }
                },
                "required": ["brand", "monthlyPredictions"]
            }
        },
        "summary": {
            "type": "STRING",
            "description": "Executive summary of the yearly outlook across brands, identifying key growth drivers."
        }
    },
    "required": ["brandForecasts", "summary"]
}

def format_amount(amount: float) -> str:
    """Render whole amounts without a decimal part"""
    amount = float(amount)
    return str(int(amount)) if amount.is_integer() else repr(amount)

class GeminiClient:
    """Client for the Gemini generateContent REST API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        forecast_model: Optional[str] = None,
        chat_model: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.base_url = (base_url or settings.GEMINI_API_BASE_URL).rstrip("/")
        self.forecast_model = forecast_model or settings.GEMINI_FORECAST_MODEL
        self.chat_model = chat_model or settings.GEMINI_CHAT_MODEL
        self.timeout = timeout or settings.GEMINI_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def generate_content(self, model: str, prompt: str, generation_config: Dict[str, Any]) -> str:
        """Call generateContent and return the concatenated response text"""
        url = f"{self.base_url}/models/{model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config
        }

        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ExternalModelError(f"Gemini request failed: {type(e).__name__}") from e
        except ValueError as e:
            raise ExternalModelError("Gemini returned a non-JSON response") from e

        candidates = data.get("candidates") or []
        if not candidates:
            raise ExternalModelError("No response from Gemini.")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts if not part.get("thought"))

    @staticmethod
    def build_forecast_prompt(monthly_totals: Dict[str, Dict[str, float]], target_year: int, store_count: int) -> str:
        """Build the brand forecast prompt from monthly brand totals"""
        lines = ["Brand,Month,TotalAmount"]
        for brand, months in monthly_totals.items():
            for month, amount in sorted(months.items()):
                lines.append(f"{brand},{month},{format_amount(amount)}")
        csv_data = "\n".join(lines)

        return f"""
You are an expert fashion retail planner.

Historical monthly sales data by Brand:
---
{csv_data}
---

Context:
- Brands: {', '.join(monthly_totals.keys())}.
- We have approx {store_count} active counters.

Task:
1. Analyze seasonality for each brand.
2. Forecast the TOTAL monthly sales for the year {target_year} for each BRAND.
3. Return a JSON with monthly predictions.
4. Provide a rationale that explains key drivers.
"""

    @staticmethod
    def parse_forecast_response(text: str) -> BrandForecastOutput:
        """Parse the JSON forecast response into typed predictions"""
        if not text:
            raise ExternalModelError("No response from Gemini.")

        data = json.loads(text)
        predictions = []
        for brand_forecast in data.get("brandForecasts") or []:
            for prediction in brand_forecast.get("monthlyPredictions") or []:
                amount = float(prediction["forecastAmount"])
                if not math.isfinite(amount):
                    raise ExternalModelError(
                        f"Non-finite forecast amount for {brand_forecast['brand']}: {amount}"
                    )
                predictions.append(BrandMonthPrediction(
                    brand=brand_forecast["brand"],
                    month=int(prediction["month"]),
                    forecast_amount=amount,
                    rationale=prediction.get("rationale") or ""
                ))
        return BrandForecastOutput(predictions=predictions, summary=data.get("summary") or "")

    def forecast_brands(
        self,
        monthly_totals: Dict[str, Dict[str, float]],
        target_year: int,
        store_count: int = 0
    ) -> BrandForecastResult:
        """Ask the model for brand-level monthly forecasts; never raises"""
        if not self.is_configured:
            return BrandForecastResult(error="Gemini API key not configured")

        prompt = self.build_forecast_prompt(monthly_totals, target_year, store_count)
        generation_config = {
            "responseMimeType": "application/json",
            "responseSchema": BRAND_FORECAST_SCHEMA,
            "temperature": settings.FORECAST_TEMPERATURE
        }

        try:
            text = self.generate_content(self.forecast_model, prompt, generation_config)
            output = self.parse_forecast_response(text)
        except (ExternalModelError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"AI forecast failed: {e}")
            return BrandForecastResult(error=str(e) or type(e).__name__)

        return BrandForecastResult(output=output)

    @staticmethod
    def build_question_prompt(query: str, snapshot: BusinessSnapshot) -> str:
        """Build the Q&A prompt from the business snapshot"""
        return f"""
You are the AI Brain of a Consignment Fashion ERP system called SalesCast.
You have access to the following business snapshot:

Business Context:
- Total Stores: {snapshot.store_count}
- Total Sales YTD: ${snapshot.total_sales:,.2f}
- Total Inventory Value: ${snapshot.total_inventory_value:,.2f}
- Total Overdue AR: ${snapshot.total_overdue:,.2f}

Top 5 Stores by Sales:
{json.dumps(snapshot.top_stores)}

High Risk Stores (Overdue > 60 days):
{json.dumps(snapshot.high_risk_stores)}

Underperforming Stores (Bottom 5):
{json.dumps(snapshot.bottom_stores)}

Available Data Structure in ERP:
- Sales Records (Date, Brand, Store, Amount)
- Inventory (Store, Product SKU, Quantity)
- Invoices (Store, Amount, Due Date, Status, Paid Amount, Payment History)
- Products (SKU, Cost, Price, Variants)

User Query: "{query}"

Task:
Answer the user's question analytically.
If they ask for specific numbers not in the summary, explain that you are analyzing based on the high-level summary provided.
Provide actionable advice for consignment operations (e.g. suggesting stock transfers, debt collection).
Keep the tone professional, helpful, and concise.
"""

    def ask_business_question(self, query: str, snapshot: BusinessSnapshot) -> str:
        """Answer a free-text question about the business; never raises"""
        if not self.is_configured:
            return NO_KEY_ANSWER

        generation_config = {
            "thinkingConfig": {"thinkingBudget": settings.GEMINI_THINKING_BUDGET}
        }

        try:
            text = self.generate_content(
                self.chat_model, self.build_question_prompt(query, snapshot), generation_config
            )
        except (ExternalModelError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"AI chat error: {e}")
            return FAILED_ANSWER

        return text or EMPTY_ANSWER
