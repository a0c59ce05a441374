"""Health check endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import BaseModel

from weather_report import __version__
from weather_report.database import get_db, check_db_connection

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    database: str
    message: str


@router.get("/health", response_model=HealthResponse)
async def health_check(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Health check endpoint.

    Verifies that the API is running and can reach the report database.
    """
    if not check_db_connection(db):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )

    return HealthResponse(
        status="healthy",
        database="connected",
        message="Weather Report API is running"
    )


@router.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "service": "Weather Report API",
        "version": __version__,
        "documentation": "/docs",
        "health_check": "/health"
    }
