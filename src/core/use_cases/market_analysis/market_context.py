"""
Market Context Module

Coarse trend and volatility labels for a historical series. The narrative
layer interpolates these next to the detected patterns.
"""

import pandas as pd
from typing import Sequence
from pydantic import BaseModel, ConfigDict, Field
from core.domain.entities.HistoricalDataEntity import HistoricalDataPoint

# Percent change from first to last price
STRONG_TREND_PCT = 5.0
TREND_PCT = 2.0

# Mean absolute day-over-day change, as a fraction of the previous price
HIGH_VOLATILITY = 0.05
MODERATE_VOLATILITY = 0.02


class MarketContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trend: str
    volatility: str
    average_change: float = Field(..., alias="averageChange")


def classify_trend(prices: Sequence[float]) -> str:
    if len(prices) < 2:
        return "stable"

    first_price = float(prices[0])
    last_price = float(prices[-1])
    change = (last_price - first_price) / first_price * 100

    if change > STRONG_TREND_PCT:
        return "strong upward"
    if change > TREND_PCT:
        return "upward"
    if change < -STRONG_TREND_PCT:
        return "strong downward"
    if change < -TREND_PCT:
        return "downward"
    return "stable"


def average_absolute_change(prices: Sequence[float]) -> float:
    if len(prices) < 2:
        return 0.0
    changes = pd.Series(prices, dtype=float).pct_change().abs().dropna()
    return float(changes.mean())


def volatility_label(avg_change: float) -> str:
    if avg_change > HIGH_VOLATILITY:
        return "high"
    if avg_change > MODERATE_VOLATILITY:
        return "moderate"
    return "low"


def classify_volatility(prices: Sequence[float]) -> str:
    return volatility_label(average_absolute_change(prices))


def build_market_context(series: Sequence[HistoricalDataPoint]) -> MarketContext:
    prices = [point.price for point in series]
    avg_change = average_absolute_change(prices)
    return MarketContext(
        trend=classify_trend(prices),
        volatility=volatility_label(avg_change),
        average_change=round(avg_change, 6),
    )
