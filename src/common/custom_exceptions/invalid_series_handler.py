# Exception Handler
from fastapi import Request
from fastapi.responses import JSONResponse
from common.custom_exceptions.invalid_series_error import InvalidSeriesError
from common.logger import logger

async def invalid_series_handler(request: Request, exc: InvalidSeriesError):
    logger.warning(f"Rejected series on {request.url.path}: {exc.message} ({exc.detail})")
    return JSONResponse(
        status_code=422,
        content={
            "error": exc.message,
            "detail": exc.detail or "Historical series failed input validation"
        }
    )
