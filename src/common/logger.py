import logging
import sys
# Import the process-safe handler
from concurrent_log_handler import ConcurrentRotatingFileHandler
from pathlib import Path
from common.config import settings


def configure_logging(name: str = "StockInsights") -> logging.Logger:
    """
    Configure and return a logger with process-safe file rotation and stream handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))

    # Prevent adding duplicate handlers if this function is called multiple times
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    )

    # 1. ConcurrentRotatingFileHandler coordinates rotation through a lock file,
    # so several uvicorn workers can share one log.
    if settings.LOG_TO_FILE:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = ConcurrentRotatingFileHandler(
            str(log_dir / "app.log"),
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # 2. Console handler that writes to stdout
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Set a global hook for uncaught exceptions
    def exception_handler(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = exception_handler

    logger.propagate = False

    return logger

# Initialize and export the logger for use in other modules
logger = configure_logging()
