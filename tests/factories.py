"""Test data builders."""

from datetime import date

from app.schemas.sales import SalesRecord


def sale(day, brand, store, amount):
    """Build a SalesRecord from an ISO date string or date."""
    if isinstance(day, str):
        day = date.fromisoformat(day)
    return SalesRecord(date=day, brand=brand, store=store, amount=amount)
