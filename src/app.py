# src/app.py
from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from common.config import settings
from common.logger import configure_logging, logger
from common.custom_exceptions.invalid_series_error import InvalidSeriesError
from common.custom_exceptions.invalid_series_handler import invalid_series_handler
from core.use_cases.market_analysis.detect_patterns import DETECTION_ORDER
from presentation.api.routes import analysis

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 🚀 Startup
    configure_logging()
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}...")
    logger.info(f"Pattern detectors loaded: {', '.join(DETECTION_ORDER)}")

    yield  # 🧘 Everything after this happens at shutdown
    logger.info("Shutting down application...")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)

app.add_exception_handler(InvalidSeriesError, invalid_series_handler)

# Include all routers
app.include_router(analysis.router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# Add this block to run the server
if __name__ == "__main__":
    uvicorn.run(
        "app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True
    )
