# src/presentation/api/routes/analysis.py
from fastapi import APIRouter
from typing import List, Optional
from common.logger import logger
from core.domain.entities.HistoricalDataEntity import ensure_ascending_dates
from core.use_cases.market_analysis.detect_patterns import DETECTION_ORDER, pattern_detector
from core.use_cases.market_analysis.detect_patterns_engine.pattern_registry import get_patterns_by_key, pattern_registry
from core.use_cases.market_analysis.market_context import build_market_context
from core.services.pattern_matcher_service import (
    build_technical_insight,
    describe_patterns,
    resolve_pattern,
)
from presentation.api.schemas.analysis import (
    DetectorInfo,
    PatternDetectionRequest,
    PatternDetectionResponse,
    PatternMatchRequest,
    PatternMatchResponse,
)

# Initialize FastAPI router
router = APIRouter(prefix="/analysis", tags=["Market Analysis"])


@router.post(
    "/patterns",
    response_model=PatternDetectionResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True
)
def detect_patterns(request: PatternDetectionRequest):
    """Detect chart patterns in a daily history and summarise its trend and volatility."""
    ensure_ascending_dates(request.data)
    patterns = pattern_detector.detect(request.data)
    logger.info(
        f"Detected {len(patterns)} pattern(s) for {request.symbol or 'unnamed series'} "
        f"over {len(request.data)} points: {[p.pattern_key for p in patterns]}"
    )
    return PatternDetectionResponse(
        symbol=request.symbol,
        patterns=patterns,
        market_context=build_market_context(request.data),
        pattern_summary=describe_patterns(patterns),
        technical_insight=build_technical_insight(patterns),
        data_points=len(request.data),
    )


@router.post(
    "/patterns/match",
    response_model=PatternMatchResponse,
    response_model_by_alias=True
)
def match_pattern(request: PatternMatchRequest):
    """Resolve a narrative `patternType` tag to one of the supplied detected patterns."""
    return PatternMatchResponse(pattern=resolve_pattern(request.patterns, request.pattern_type))


@router.get("/pattern-keys", response_model=List[DetectorInfo], response_model_by_alias=True)
def list_pattern_keys(key: Optional[str] = None):
    """List the detectors in the order they run, with the keys each can emit."""
    registry = get_patterns_by_key(key) if key else pattern_registry
    return [
        DetectorInfo(
            name=name,
            window=registry[name]["window"],
            pattern_keys=registry[name]["pattern_keys"],
        )
        for name in DETECTION_ORDER
        if name in registry
    ]
