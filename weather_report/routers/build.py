"""Report building endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from weather_report.config import get_config, get_weather_data_config, WeatherDataConfig
from weather_report.database import get_db
from weather_report.exceptions import ReportPersistenceError, UpstreamFetchError
from weather_report.models import WeatherReportResponse
from weather_report.report_builder import ReportBuilder

router = APIRouter(prefix="/weather-report", tags=["weather-report"])
config = get_config()


def get_report_builder(
    db: Session = Depends(get_db),
    weather_data_config: WeatherDataConfig = Depends(get_weather_data_config),
) -> ReportBuilder:
    """Dependency providing a builder bound to the request's database session."""
    return ReportBuilder(db=db, config=weather_data_config)


@router.get("/{zip_code}", response_model=WeatherReportResponse)
def build_weather_report(
    zip_code: str = Path(..., description="Postal code to report on"),
    days: int = Query(
        ...,
        ge=config.min_report_days,
        le=config.max_report_days,
        description="Number of days to look back"
    ),
    builder: ReportBuilder = Depends(get_report_builder),
) -> WeatherReportResponse:
    """
    Build a precipitation and temperature report for a postal code.

    The report is stored before it is returned.

    Path parameters:
    - **zip_code**: Postal code

    Query parameters:
    - **days**: Days to look back (1-30)

    Raises:
        502: An observation provider could not be reached
        503: The report could not be stored
    """
    try:
        report = builder.build_report(zip_code, days)
    except UpstreamFetchError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"{e.source} data unavailable"
        ) from e
    except ReportPersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        ) from e

    return WeatherReportResponse.model_validate(report)
