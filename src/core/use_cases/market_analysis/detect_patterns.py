# src/core/use_cases/market_analysis/detect_patterns.py
import numpy as np
from typing import List, Sequence
from common.logger import logger
from common.custom_exceptions.invalid_series_error import InvalidSeriesError
from core.domain.entities.HistoricalDataEntity import HistoricalDataPoint
from core.domain.entities.TechnicalPatternEntity import TechnicalPattern

# Import the pattern module to ensure registration
from .detect_patterns_engine import chart_patterns  # noqa: F401
from .detect_patterns_engine.pattern_registry import get_pattern_function

MIN_SERIES_LENGTH = 10
MAX_PATTERNS = 4

# Fixed run order; it decides which results survive the MAX_PATTERNS cut.
DETECTION_ORDER = (
    "triangle",
    "head_and_shoulders",
    "double_top_bottom",
    "support_resistance",
    "trend_channel",
)


class PatternDetector:
    """
    Runs every chart pattern detector against one historical series.

    Each detector sees the same read-only price array; a detector that raises
    is logged and counts as "no pattern" so the rest still run.
    """

    def detect(self, series: Sequence[HistoricalDataPoint]) -> List[TechnicalPattern]:
        return self.detect_prices([point.price for point in series])

    def detect_prices(self, prices: Sequence[float]) -> List[TechnicalPattern]:
        if len(prices) < MIN_SERIES_LENGTH:
            logger.debug(f"Series of {len(prices)} points is too short for pattern detection")
            return []

        values = self._to_price_array(prices)

        patterns: List[TechnicalPattern] = []
        for name in DETECTION_ORDER:
            func = get_pattern_function(name)
            if func is None:
                raise ValueError(f"Unsupported pattern: {name}")
            try:
                pattern = func(values)
            except Exception as e:
                logger.error(f"Pattern detector '{name}' failed: {str(e)}", exc_info=True)
                continue
            if pattern is not None:
                logger.debug(f"[{name}] matched {pattern.type} ({pattern.start_index}-{pattern.end_index})")
                patterns.append(pattern)

        if len(patterns) > MAX_PATTERNS:
            dropped = [p.type for p in patterns[MAX_PATTERNS:]]
            logger.info(f"Keeping first {MAX_PATTERNS} patterns, dropping {dropped}")

        return patterns[:MAX_PATTERNS]

    @staticmethod
    def _to_price_array(prices: Sequence[float]) -> np.ndarray:
        try:
            values = np.array(prices, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidSeriesError("Prices must be numeric", detail=str(e)) from e

        if values.ndim != 1:
            raise InvalidSeriesError("Prices must be a flat sequence", detail=f"got shape {values.shape}")

        bad = np.flatnonzero(~np.isfinite(values) | (values <= 0))
        if bad.size:
            raise InvalidSeriesError(
                "Prices must be finite and positive",
                detail=f"invalid price at index {int(bad[0])}: {values[bad[0]]}"
            )

        values.setflags(write=False)
        return values


# Shared instance
pattern_detector = PatternDetector()
