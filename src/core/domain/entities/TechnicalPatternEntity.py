# src/core/domain/entities/TechnicalPatternEntity.py
"""
Detection results handed to the narrative and chart layers.

Attribute names are snake_case; the JSON names the browser client reads are
camelCase aliases, so serialise with ``model_dump(by_alias=True, exclude_none=True)``.
Overlay coordinates are (index into the full series, price) pairs.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PatternKey(str, Enum):
    TRIANGLE = "triangle"
    HEAD_AND_SHOULDERS = "head-and-shoulders"
    DOUBLE_TOP = "double-top"
    DOUBLE_BOTTOM = "double-bottom"
    SUPPORT = "support"
    RESISTANCE = "resistance"
    UPTREND = "uptrend"
    DOWNTREND = "downtrend"


class OverlayLine(BaseModel):
    x1: int
    y1: float
    x2: int
    y2: float
    label: Optional[str] = None


class OverlayPoint(BaseModel):
    x: int
    y: float
    label: str


class OverlayZone(BaseModel):
    x: int
    y: float
    width: float
    height: float
    label: Optional[str] = None


class PatternOverlayData(BaseModel):
    lines: Optional[List[OverlayLine]] = None
    points: Optional[List[OverlayPoint]] = None
    zones: Optional[List[OverlayZone]] = None

    def referenced_indices(self) -> List[int]:
        indices = []
        for line in self.lines or []:
            indices.extend([line.x1, line.x2])
        for point in self.points or []:
            indices.append(point.x)
        for zone in self.zones or []:
            indices.append(zone.x)
        return indices


class TechnicalPattern(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    type: str
    pattern_key: PatternKey = Field(..., alias="patternKey")
    start_index: int = Field(..., alias="startIndex", ge=0)
    end_index: int = Field(..., alias="endIndex", ge=0)
    description: str
    significance: str
    overlay_data: Optional[PatternOverlayData] = Field(None, alias="overlayData")


class TechnicalInsight(BaseModel):
    """Deterministic 'technical' insight used when the text service is unavailable."""
    model_config = ConfigDict(populate_by_name=True)

    type: str = "technical"
    title: str
    description: str
    confidence: int = Field(..., ge=0, le=100)
    technical_pattern: Optional[TechnicalPattern] = Field(None, alias="technicalPattern")
