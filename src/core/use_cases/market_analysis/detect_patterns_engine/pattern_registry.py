# src/core/use_cases/market_analysis/detect_patterns_engine/pattern_registry.py
"""
Central pattern registry and decorator for registering pattern detection functions.

The registry is a lookup table (name -> detector, trailing window, pattern keys).
The order detectors run in is fixed by PatternDetector, not by registration order.
"""

pattern_registry = {}

def register_pattern(name, window, pattern_keys):
    def decorator(func):
        pattern_registry[name] = {
            "function": func,
            "window": window,
            "pattern_keys": [str(getattr(key, "value", key)) for key in pattern_keys]
        }
        return func
    return decorator

def get_pattern_function(name):
    return pattern_registry.get(name, {}).get("function")

def get_patterns_by_key(pattern_key):
    return {name: info for name, info in pattern_registry.items() if pattern_key in info["pattern_keys"]}
