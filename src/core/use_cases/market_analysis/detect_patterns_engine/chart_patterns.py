# src/core/use_cases/market_analysis/detect_patterns_engine/chart_patterns.py
"""
Chart pattern detection functions. Import and use the pattern_registry for registration.

Every detector takes the full price series (oldest first, read-only) and looks
only at a trailing window of it. A detector returns a TechnicalPattern when its
geometric condition holds and None otherwise; a series shorter than the window
is simply "no pattern". Indices in the result always refer to the full series.

The thresholds below are fixed classification rules. Changing any of them
changes which patterns users are shown.
"""
import numpy as np
from typing import Optional
from core.domain.entities.TechnicalPatternEntity import (
    OverlayLine,
    OverlayPoint,
    PatternKey,
    PatternOverlayData,
    TechnicalPattern,
)
from .extrema import average_step_slope, find_local_extrema
from .pattern_registry import register_pattern

# --- Trailing window sizes (points) ---
TRIANGLE_WINDOW = 15
HEAD_AND_SHOULDERS_WINDOW = 20
DOUBLE_TOP_BOTTOM_WINDOW = 15
SUPPORT_RESISTANCE_WINDOW = 10
TREND_CHANNEL_WINDOW = 15

# --- Triangle ---
TRIANGLE_TRENDING_SLOPE = 0.1     # dollars per extremum step; steeper counts as a sloped trendline
TRIANGLE_FLAT_SLOPE = 0.05        # dollars per extremum step; shallower counts as a flat trendline
TRIANGLE_CONVERGENCE_RATIO = 0.01  # slope gap must exceed 1% of the opening peak-trough spread

# --- Head and shoulders ---
HS_PEAK_ORDER = 2                  # peaks must beat two neighbours on each side
HS_HEAD_PROMINENCE = 1.02          # head at least 2% above each shoulder
HS_SHOULDER_TOLERANCE = 0.03       # shoulders within 3% of each other

# --- Double top / bottom ---
DOUBLE_LEVEL_TOLERANCE = 0.02      # the two tops (or bottoms) within 2% of each other
DOUBLE_SCAN_EDGE = 2               # extrema are taken from window positions 2..len-3

# --- Support / resistance ---
SR_TOUCH_RATIO = 0.02              # a touch lies within 2% of the window range from the level
SR_PROXIMITY_RATIO = 0.05          # current price within 5% of the window range from the level
SR_MIN_TOUCHES = 2

# --- Trend channel ---
TREND_SLOPE_RATIO = 0.03           # both trendlines move at least 3% of the window range per step


def _trendline(first, last, label: str) -> OverlayLine:
    return OverlayLine(x1=first.index, y1=first.price, x2=last.index, y2=last.price, label=label)


@register_pattern("triangle", window=TRIANGLE_WINDOW, pattern_keys=[PatternKey.TRIANGLE])
def detect_triangle(prices: np.ndarray) -> Optional[TechnicalPattern]:
    """
    Converging trendlines over the trailing 15 points.

    The upper line joins the first and last peak, the lower line the first and
    last trough. Slopes are measured per extremum step, so they are in dollars.
    """
    n = len(prices)
    if n < TRIANGLE_WINDOW:
        return None

    peaks, troughs = find_local_extrema(prices[-TRIANGLE_WINDOW:], n)
    if len(peaks) < 2 or len(troughs) < 2:
        return None

    high_slope = average_step_slope(peaks)
    low_slope = average_step_slope(troughs)

    converging = abs(high_slope - low_slope) > abs(peaks[0].price - troughs[0].price) * TRIANGLE_CONVERGENCE_RATIO
    if not converging:
        return None

    pattern_type = "Symmetrical Triangle"
    if high_slope < -TRIANGLE_TRENDING_SLOPE and low_slope > TRIANGLE_TRENDING_SLOPE:
        pattern_type = "Symmetrical Triangle"
    elif high_slope < -TRIANGLE_TRENDING_SLOPE and abs(low_slope) < TRIANGLE_FLAT_SLOPE:
        pattern_type = "Descending Triangle"
    elif abs(high_slope) < TRIANGLE_FLAT_SLOPE and low_slope > TRIANGLE_TRENDING_SLOPE:
        pattern_type = "Ascending Triangle"

    if pattern_type == "Ascending Triangle":
        significance = "Bullish pattern - breakout above resistance typically signals upward move"
    elif pattern_type == "Descending Triangle":
        significance = "Bearish pattern - breakdown below support typically signals downward move"
    else:
        significance = "Consolidation pattern - breakout direction indicates next major move"

    return TechnicalPattern(
        type=pattern_type,
        pattern_key=PatternKey.TRIANGLE,
        start_index=n - TRIANGLE_WINDOW,
        end_index=n - 1,
        description=f"{pattern_type} forming with converging trendlines",
        significance=significance,
        overlay_data=PatternOverlayData(
            lines=[
                _trendline(peaks[0], peaks[-1], "Upper trendline"),
                _trendline(troughs[0], troughs[-1], "Lower trendline"),
            ]
        ),
    )


@register_pattern("head_and_shoulders", window=HEAD_AND_SHOULDERS_WINDOW, pattern_keys=[PatternKey.HEAD_AND_SHOULDERS])
def detect_head_and_shoulders(prices: np.ndarray) -> Optional[TechnicalPattern]:
    """
    Bearish three-peak reversal over the trailing 20 points.

    Uses the last three two-sided peaks as left shoulder, head and right
    shoulder. The neckline is horizontal: the mean of the first and last trough
    between the shoulders, or the left shoulder price when fewer than two
    troughs sit between them.
    """
    n = len(prices)
    if n < HEAD_AND_SHOULDERS_WINDOW:
        return None

    recent = prices[-HEAD_AND_SHOULDERS_WINDOW:]
    peaks, _ = find_local_extrema(recent, n, order=HS_PEAK_ORDER)
    if len(peaks) < 3:
        return None

    left, head, right = peaks[-3:]
    if not (head.price > left.price * HS_HEAD_PROMINENCE and head.price > right.price * HS_HEAD_PROMINENCE):
        return None
    if abs(left.price - right.price) / left.price >= HS_SHOULDER_TOLERANCE:
        return None

    _, troughs = find_local_extrema(recent, n)
    neckline_troughs = [t for t in troughs if left.index <= t.index < right.index]

    neckline = left.price
    if len(neckline_troughs) >= 2:
        neckline = (neckline_troughs[0].price + neckline_troughs[-1].price) / 2

    return TechnicalPattern(
        type="Head and Shoulders",
        pattern_key=PatternKey.HEAD_AND_SHOULDERS,
        start_index=left.index,
        end_index=right.index,
        description="Classic head and shoulders reversal pattern forming",
        significance="Bearish reversal pattern - breaking below neckline suggests downward move",
        overlay_data=PatternOverlayData(
            lines=[OverlayLine(x1=left.index, y1=neckline, x2=right.index, y2=neckline, label="Neckline")],
            points=[
                OverlayPoint(x=left.index, y=left.price, label="Left Shoulder"),
                OverlayPoint(x=head.index, y=head.price, label="Head"),
                OverlayPoint(x=right.index, y=right.price, label="Right Shoulder"),
            ],
        ),
    )


@register_pattern(
    "double_top_bottom",
    window=DOUBLE_TOP_BOTTOM_WINDOW,
    pattern_keys=[PatternKey.DOUBLE_TOP, PatternKey.DOUBLE_BOTTOM]
)
def detect_double_top_bottom(prices: np.ndarray) -> Optional[TechnicalPattern]:
    """
    Two peaks (or troughs) at nearly the same level over the trailing 15 points.

    Tops are checked first and win when both shapes are present.
    """
    n = len(prices)
    if n < DOUBLE_TOP_BOTTOM_WINDOW:
        return None

    peaks, troughs = find_local_extrema(prices[-DOUBLE_TOP_BOTTOM_WINDOW:], n, edge=DOUBLE_SCAN_EDGE)

    if len(peaks) >= 2:
        first, second = peaks[-2:]
        if abs(first.price - second.price) / first.price < DOUBLE_LEVEL_TOLERANCE:
            return TechnicalPattern(
                type="Double Top",
                pattern_key=PatternKey.DOUBLE_TOP,
                start_index=first.index,
                end_index=second.index,
                description="Double top pattern indicating potential reversal",
                significance="Bearish reversal pattern - two failed attempts at higher prices",
                overlay_data=PatternOverlayData(
                    lines=[_trendline(first, second, "Resistance")],
                    points=[
                        OverlayPoint(x=first.index, y=first.price, label="First Top"),
                        OverlayPoint(x=second.index, y=second.price, label="Second Top"),
                    ],
                ),
            )

    if len(troughs) >= 2:
        first, second = troughs[-2:]
        if abs(first.price - second.price) / first.price < DOUBLE_LEVEL_TOLERANCE:
            return TechnicalPattern(
                type="Double Bottom",
                pattern_key=PatternKey.DOUBLE_BOTTOM,
                start_index=first.index,
                end_index=second.index,
                description="Double bottom pattern indicating potential reversal",
                significance="Bullish reversal pattern - two successful tests of support level",
                overlay_data=PatternOverlayData(
                    lines=[_trendline(first, second, "Support")],
                    points=[
                        OverlayPoint(x=first.index, y=first.price, label="First Bottom"),
                        OverlayPoint(x=second.index, y=second.price, label="Second Bottom"),
                    ],
                ),
            )

    return None


@register_pattern(
    "support_resistance",
    window=SUPPORT_RESISTANCE_WINDOW,
    pattern_keys=[PatternKey.RESISTANCE, PatternKey.SUPPORT]
)
def detect_support_resistance(prices: np.ndarray) -> Optional[TechnicalPattern]:
    """Current price pressing on a recent high or low that was touched at least twice."""
    n = len(prices)
    if n < SUPPORT_RESISTANCE_WINDOW:
        return None

    recent = prices[-SUPPORT_RESISTANCE_WINDOW:]
    recent_high = float(np.max(recent))
    recent_low = float(np.min(recent))
    current_price = float(prices[-1])
    price_range = recent_high - recent_low

    high_touches = int(np.sum(np.abs(recent - recent_high) < price_range * SR_TOUCH_RATIO))
    low_touches = int(np.sum(np.abs(recent - recent_low) < price_range * SR_TOUCH_RATIO))

    start_index = n - SUPPORT_RESISTANCE_WINDOW
    end_index = n - 1

    if abs(current_price - recent_high) < price_range * SR_PROXIMITY_RATIO and high_touches >= SR_MIN_TOUCHES:
        return TechnicalPattern(
            type="Testing Resistance",
            pattern_key=PatternKey.RESISTANCE,
            start_index=start_index,
            end_index=end_index,
            description=f"Price testing resistance level at ${recent_high:.2f}",
            significance="Breaking above resistance could trigger upward momentum",
            overlay_data=PatternOverlayData(
                lines=[OverlayLine(
                    x1=start_index, y1=recent_high, x2=end_index, y2=recent_high,
                    label=f"Resistance ${recent_high:.2f}"
                )]
            ),
        )

    if abs(current_price - recent_low) < price_range * SR_PROXIMITY_RATIO and low_touches >= SR_MIN_TOUCHES:
        return TechnicalPattern(
            type="Testing Support",
            pattern_key=PatternKey.SUPPORT,
            start_index=start_index,
            end_index=end_index,
            description=f"Price testing support level at ${recent_low:.2f}",
            significance="Holding support suggests buying interest at this level",
            overlay_data=PatternOverlayData(
                lines=[OverlayLine(
                    x1=start_index, y1=recent_low, x2=end_index, y2=recent_low,
                    label=f"Support ${recent_low:.2f}"
                )]
            ),
        )

    return None


@register_pattern(
    "trend_channel",
    window=TREND_CHANNEL_WINDOW,
    pattern_keys=[PatternKey.UPTREND, PatternKey.DOWNTREND]
)
def detect_trend_channel(prices: np.ndarray) -> Optional[TechnicalPattern]:
    """Highs and lows both stepping up (or both stepping down) over the trailing 15 points."""
    n = len(prices)
    if n < TREND_CHANNEL_WINDOW:
        return None

    recent = prices[-TREND_CHANNEL_WINDOW:]
    highs, lows = find_local_extrema(recent, n)
    if len(lows) < 2 or len(highs) < 2:
        return None

    low_slope = average_step_slope(lows)
    high_slope = average_step_slope(highs)
    price_range = float(np.max(recent) - np.min(recent))
    threshold = price_range * TREND_SLOPE_RATIO

    if low_slope > threshold and high_slope > threshold:
        pattern_type, pattern_key = "Uptrend Channel", PatternKey.UPTREND
        description = "Price moving within an upward trending channel"
        significance = "Bullish trend - higher highs and higher lows indicate strength"
    elif low_slope < -threshold and high_slope < -threshold:
        pattern_type, pattern_key = "Downtrend Channel", PatternKey.DOWNTREND
        description = "Price moving within a downward trending channel"
        significance = "Bearish trend - lower highs and lower lows indicate weakness"
    else:
        return None

    return TechnicalPattern(
        type=pattern_type,
        pattern_key=pattern_key,
        start_index=n - TREND_CHANNEL_WINDOW,
        end_index=n - 1,
        description=description,
        significance=significance,
        overlay_data=PatternOverlayData(
            lines=[
                _trendline(highs[0], highs[-1], "Upper channel"),
                _trendline(lows[0], lows[-1], "Lower channel"),
            ]
        ),
    )
