# src/core/use_cases/market_analysis/detect_patterns_engine/extrema.py
"""
Local peak/trough scanner shared by every chart pattern detector.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np
from scipy.signal import argrelextrema


@dataclass(frozen=True)
class Extremum:
    index: int  # position in the full series, not the window
    price: float


def find_local_extrema(
    window: Sequence[float],
    series_length: int,
    order: int = 1,
    edge: Optional[int] = None
) -> Tuple[List[Extremum], List[Extremum]]:
    """
    Find strict local peaks and troughs in a trailing window of a price series.

    Args:
        window: the trailing slice of the full series
        series_length: length of the full series, used to translate window
            positions back to full-series indices
        order: neighbours on each side a point must strictly exceed (peak) or
            undercut (trough); 1 for ordinary detectors, 2 for stricter ones
        edge: window positions closer than this to either end are never
            candidates; defaults to ``order``

    Returns:
        (peaks, troughs), each ordered by index
    """
    prices = np.asarray(window, dtype=float)
    edge = order if edge is None else edge
    if order < 1 or edge < order:
        raise ValueError(f"edge ({edge}) must be >= order ({order}) >= 1")

    offset = series_length - len(prices)
    last_candidate = len(prices) - edge

    # argrelextrema compares strictly against all `order` neighbours on each side
    peak_positions = argrelextrema(prices, np.greater, order=order)[0]
    trough_positions = argrelextrema(prices, np.less, order=order)[0]

    def _tag(positions) -> List[Extremum]:
        return [
            Extremum(index=offset + int(i), price=float(prices[i]))
            for i in positions
            if edge <= i < last_candidate
        ]

    return _tag(peak_positions), _tag(trough_positions)


def average_step_slope(extrema: List[Extremum]) -> float:
    """Price change from first to last extremum divided by the number of steps between them."""
    return (extrema[-1].price - extrema[0].price) / (len(extrema) - 1)
