"""Stored report endpoints."""

import uuid
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from weather_report.config import get_config
from weather_report.crud import get_weather_report, get_weather_reports
from weather_report.database import get_db
from weather_report.models import PaginatedResponse, WeatherReportResponse

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])
config = get_config()


@router.get("", response_model=PaginatedResponse)
async def list_reports(
    zip_code: Optional[str] = Query(
        default=None,
        description="Filter by postal code"
    ),
    limit: int = Query(
        default=config.default_page_size,
        ge=1,
        le=config.max_page_size,
        description="Maximum number of results per page"
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of results to skip"
    ),
    db: Session = Depends(get_db)
) -> PaginatedResponse:
    """
    List stored reports, newest first.

    Query parameters:
    - **zip_code**: Only reports for this postal code
    - **limit**: Maximum number of results (default: 50, max: 1000)
    - **offset**: Number of results to skip for pagination
    """
    reports, total = get_weather_reports(
        db=db,
        zip_code=zip_code,
        limit=limit,
        offset=offset
    )

    return PaginatedResponse(
        total=total,
        limit=limit,
        offset=offset,
        items=[WeatherReportResponse.model_validate(r) for r in reports]
    )


@router.get("/{report_id}", response_model=WeatherReportResponse)
async def get_report(
    report_id: uuid.UUID,
    db: Session = Depends(get_db)
) -> WeatherReportResponse:
    """
    Get a stored report by ID.

    Raises:
        404: Report not found
    """
    report = get_weather_report(db, report_id)

    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Report {report_id} not found"
        )

    return WeatherReportResponse.model_validate(report)
