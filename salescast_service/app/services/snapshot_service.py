#!/usr/bin/env python3
"""
Business snapshot service - condensed context for the assistant
"""

from collections import defaultdict
from typing import Iterable, List

from app.schemas.chat import BusinessSnapshot
from app.schemas.sales import SalesRecord

RANKED_STORE_COUNT = 5

def build_snapshot(
    history: List[SalesRecord],
    stores: Iterable,
    total_inventory_value: float = 0.0,
    total_overdue: float = 0.0
) -> BusinessSnapshot:
    """Summarize sales and store profiles; stores need ``name`` and ``risk_status``"""
    stores = list(stores)

    sales_by_store = defaultdict(float)
    for record in history:
        sales_by_store[record.store] += record.amount

    # Highest sales first, ties by name
    ranked = sorted(sales_by_store.items(), key=lambda item: (-item[1], item[0]))

    store_names = {s.name for s in stores} | set(sales_by_store)

    return BusinessSnapshot(
        store_count=len(store_names),
        total_sales=sum(r.amount for r in history),
        total_inventory_value=total_inventory_value,
        total_overdue=total_overdue,
        top_stores=[name for name, _ in ranked[:RANKED_STORE_COUNT]],
        bottom_stores=[name for name, _ in reversed(ranked[-RANKED_STORE_COUNT:])],
        high_risk_stores=sorted(s.name for s in stores if s.risk_status == "High")
    )
