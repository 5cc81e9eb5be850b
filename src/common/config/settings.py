# src/common/config/settings.py
"""
Runtime settings read from the environment (a local .env file is honoured).

Detection thresholds are not read from here; they live as constants next to
the detectors in detect_patterns_engine.chart_patterns.
"""
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


APP_NAME = os.getenv("APP_NAME", "StockInsights-Backend")
APP_VERSION = "0.1.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_TO_FILE = _env_flag("LOG_TO_FILE", True)

API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
