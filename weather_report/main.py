"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from weather_report.config import get_config, get_weather_data_config
from weather_report.database import init_db
from weather_report.routers import build, health, reports

# Get configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "weather_report_api_requests_total",
    "Total API requests",
    ["method", "endpoint", "status"]
)
REQUEST_DURATION = Histogram(
    "weather_report_api_request_duration_seconds",
    "API request duration in seconds",
    ["method", "endpoint"]
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Lifespan context manager for startup and shutdown events.

    Startup:
    - Log upstream provider configuration
    - Create report tables
    """
    weather_data = get_weather_data_config()
    logger.info("Starting Weather Report API")
    logger.info(f"Precipitation provider: {weather_data.precip_data_base_url}")
    logger.info(f"Temperature provider: {weather_data.temp_data_base_url}")

    try:
        init_db()
        logger.info("Report tables ready")
    except SQLAlchemyError as e:
        logger.warning(f"Database initialization failed - API may not function properly: {e}")

    yield

    logger.info("Shutting down Weather Report API")


# Initialize FastAPI application
app = FastAPI(
    title=config.api_title,
    version=config.api_version,
    description=config.api_description,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# Request logging and metrics middleware
@app.middleware("http")
async def logging_and_metrics_middleware(request: Request, call_next):
    """
    Middleware to log requests and collect Prometheus metrics.

    Tracks:
    - Request count by method, endpoint, and status
    - Request duration by method and endpoint
    """
    if request.url.path in ("/health", "/metrics"):
        return await call_next(request)

    start_time = time.time()
    request_id = f"{int(start_time * 1000)}-{id(request)}"

    logger.info(
        f"Request started: {request.method} {request.url.path} "
        f"[{request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time
    endpoint = request.url.path

    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=endpoint,
        status=response.status_code
    ).inc()

    REQUEST_DURATION.labels(
        method=request.method,
        endpoint=endpoint
    ).observe(duration)

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"[{request_id}] - {response.status_code} - {duration:.3f}s"
    )

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time"] = f"{duration:.3f}s"

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.

    Returns:
        500 error with sanitized error message
    """
    logger.error(
        f"Unhandled exception: {request.method} {request.url.path} - {str(exc)}",
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "type": "internal_error",
            "path": str(request.url.path)
        }
    )


# Prometheus metrics endpoint
@app.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint.

    Returns:
        Prometheus metrics in text format
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


# Include routers
app.include_router(health.router)
app.include_router(build.router)
app.include_router(reports.router)


@app.get("/api/v1/info")
async def api_info():
    """
    Get API version and configuration information.

    Returns:
        API metadata and available endpoints
    """
    weather_data = get_weather_data_config()
    return {
        "api": {
            "title": config.api_title,
            "version": config.api_version,
            "description": config.api_description
        },
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "metrics": "/metrics",
            "build_report": "/weather-report/{zip_code}?days={days}",
            "reports": "/api/v1/reports"
        },
        "providers": {
            "precipitation": weather_data.precip_data_base_url,
            "temperature": weather_data.temp_data_base_url
        },
        "report_days": {
            "min": config.min_report_days,
            "max": config.max_report_days
        },
        "pagination": {
            "default_page_size": config.default_page_size,
            "max_page_size": config.max_page_size
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "weather_report.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=config.log_level.lower()
    )
