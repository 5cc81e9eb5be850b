# src/presentation/api/schemas/analysis.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from core.domain.entities.HistoricalDataEntity import HistoricalDataPoint
from core.domain.entities.TechnicalPatternEntity import TechnicalInsight, TechnicalPattern
from core.use_cases.market_analysis.market_context import MarketContext


class PatternDetectionRequest(BaseModel):
    """Schema for a pattern detection request"""
    symbol: Optional[str] = Field(None, description="Ticker the series belongs to (e.g., AAPL)")
    data: List[HistoricalDataPoint] = Field(..., description="Daily history, oldest first")


class PatternDetectionResponse(BaseModel):
    """Schema for detected patterns plus the context the narrative layer needs"""
    model_config = ConfigDict(populate_by_name=True)

    symbol: Optional[str] = None
    patterns: List[TechnicalPattern]
    market_context: MarketContext = Field(..., alias="marketContext")
    pattern_summary: str = Field(..., alias="patternSummary")
    technical_insight: Optional[TechnicalInsight] = Field(None, alias="technicalInsight")
    data_points: int = Field(..., alias="dataPoints")


class PatternMatchRequest(BaseModel):
    """Schema for resolving a narrative pattern tag against detected patterns"""
    model_config = ConfigDict(populate_by_name=True)

    patterns: List[TechnicalPattern]
    pattern_type: Optional[str] = Field(None, alias="patternType")


class PatternMatchResponse(BaseModel):
    """`pattern` is always present; null when the tag matches nothing"""
    pattern: Optional[TechnicalPattern] = None


class DetectorInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    window: int
    pattern_keys: List[str] = Field(..., alias="patternKeys")
