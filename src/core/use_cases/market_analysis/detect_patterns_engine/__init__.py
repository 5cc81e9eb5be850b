# src/core/use_cases/market_analysis/detect_patterns_engine/__init__.py
"""
Pattern detection engine initialization.
This module imports the pattern detection module to ensure its detectors are registered.
"""

# Import all pattern modules to ensure registration
from . import chart_patterns

# Import the pattern registry
from .pattern_registry import pattern_registry, get_pattern_function, get_patterns_by_key
from .extrema import Extremum, find_local_extrema

__all__ = [
    'chart_patterns',
    'pattern_registry',
    'get_pattern_function',
    'get_patterns_by_key',
    'Extremum',
    'find_local_extrema'
]
