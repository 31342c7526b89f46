"""Price formatting and per-pet pricing tables for detail pages."""

from typing import Any, Dict, Iterable, List

SIZES = ("Small", "Medium", "Large", "Giant")
RATE_ROWS = (
    ("Boarding", "rates_daily"),
    ("Walking", "walking_rates"),
    ("Meal", "meal_rates"),
)
MISSING_PRICE = "₹—"


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_price(price: Any) -> str:
    """Format a rupee amount with Indian digit grouping, e.g. ``₹1,23,456``."""
    if price is None or isinstance(price, bool):
        return MISSING_PRICE
    try:
        amount = int(round(float(price)))
    except (TypeError, ValueError):
        return MISSING_PRICE
    if amount <= 0:
        return MISSING_PRICE
    return f"₹{_group_indian(str(amount))}"


def _cells(rates: Any) -> List[str]:
    rates = rates if isinstance(rates, dict) else {}
    return [format_price(rates.get(size)) for size in SIZES]


def pricing_tables(pet_information: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    tables = []
    for pet in pet_information:
        tables.append(
            {
                "id": pet.get("id"),
                "name": pet.get("name") or pet.get("id") or "Pet",
                "rows": [{"label": label, "cells": _cells(pet.get(key))} for label, key in RATE_ROWS],
                "total": _cells(pet.get("total_prices")),
            }
        )
    return tables
