# predictions.py
"""
Six-month emission trend projection for display.

This is a cosmetic projection, not a forecast: the future value is the linear
trend nudged by a random volatility factor. Output is NOT reproducible unless
a fixed `random_source` is supplied (tests pass `lambda: 0.5`, which makes
the volatility factor exactly 1).
"""
import random
from typing import Any, Callable, Dict

from config import PREDICTION_QUANTITY
from reference_data import resolve_family
from scoring import clamp

PROJECTION_MONTHS = 6
TREND_THRESHOLD = 0.01


def unknown_projection() -> Dict[str, Any]:
    return {
        "current": 0,
        "future6Months": 0,
        "trend": "unknown",
        "confidence": 0,
        "monthlyChange": 0,
        "totalChange": 0,
        "percentChange": 0,
    }


def trend_label(monthly_rate: float) -> str:
    if monthly_rate > TREND_THRESHOLD:
        return "increasing"
    if monthly_rate < -TREND_THRESHOLD:
        return "decreasing"
    return "stable"


def generate_predictions(
    material_name: str,
    quantity: float = PREDICTION_QUANTITY,
    random_source: Callable[[], float] = random.random,
) -> Dict[str, Any]:
    """
    Project current and 6-month emissions for `quantity` units of a material.

    Returns:
        {
          "current": 1850.0,          # kg CO2 today
          "future6Months": 1850.22,
          "trend": "increasing",      # increasing / decreasing / stable / unknown
          "confidence": 95,           # 100 - volatility%
          "monthlyChange": 0.04,
          "totalChange": 0.22,
          "percentChange": 0.01
        }
    Names with no emission-factor family get zeros and trend "unknown".
    """
    factors = resolve_family(material_name)
    if factors is None:
        return unknown_projection()

    current = factors.current * quantity
    # Per-unit rate, not scaled by quantity; clients depend on these numbers.
    monthly_change = factors.current * factors.trend
    volatility_factor = 1 + (random_source() - 0.5) * factors.volatility
    future = current + monthly_change * PROJECTION_MONTHS * volatility_factor

    total_change = future - current
    percent_change = (total_change / current) * 100 if current else 0.0
    confidence = clamp(100 - factors.volatility * 100, 0, 100)

    return {
        "current": round(current, 2),
        "future6Months": round(future, 2),
        "trend": trend_label(factors.trend),
        "confidence": round(confidence),
        "monthlyChange": round(monthly_change, 2),
        "totalChange": round(total_change, 2),
        "percentChange": round(percent_change, 2),
    }
