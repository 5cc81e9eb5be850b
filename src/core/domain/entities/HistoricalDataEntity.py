# src/core/domain/entities/HistoricalDataEntity.py
import math
import datetime
from typing import List
from pydantic import BaseModel, Field, field_validator
from common.custom_exceptions.invalid_series_error import InvalidSeriesError


class HistoricalDataPoint(BaseModel):
    """One trading day of history. Series are ordered oldest first."""
    date: datetime.date
    price: float = Field(..., description="Closing price, strictly positive")
    volume: int = Field(..., ge=0, description="Shares traded that day")

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        if not math.isfinite(v) or v <= 0:
            raise ValueError('price must be a finite positive number')
        return v


def ensure_ascending_dates(series: List[HistoricalDataPoint]) -> None:
    """Raise InvalidSeriesError unless every point is dated after the one before it."""
    for position in range(1, len(series)):
        previous, current = series[position - 1], series[position]
        if current.date <= previous.date:
            raise InvalidSeriesError(
                "Historical data must be ordered oldest first",
                detail=f"{current.date} at position {position} does not follow {previous.date}"
            )
