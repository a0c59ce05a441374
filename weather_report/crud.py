"""CRUD operations for weather reports."""

import uuid
from typing import Optional
from sqlalchemy.orm import Session

from weather_report.models import WeatherReport


def save_weather_report(db: Session, report: WeatherReport) -> WeatherReport:
    """
    Add a report and commit it.

    Args:
        db: Database session
        report: Report to persist

    Returns:
        The committed report, refreshed from the database
    """
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def get_weather_report(db: Session, report_id: uuid.UUID) -> Optional[WeatherReport]:
    """
    Get a single report by ID.

    Args:
        db: Database session
        report_id: Report ID

    Returns:
        Report or None if not found
    """
    return db.query(WeatherReport).filter(
        WeatherReport.id == report_id
    ).first()


def get_weather_reports(
    db: Session,
    zip_code: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[WeatherReport], int]:
    """
    Get stored reports, newest first.

    Args:
        db: Database session
        zip_code: Filter by postal code
        limit: Maximum number of results
        offset: Number of results to skip

    Returns:
        Tuple of (list of reports, total count)
    """
    query = db.query(WeatherReport)

    if zip_code:
        query = query.filter(WeatherReport.zip_code == zip_code)

    # Get total count before pagination
    total = query.count()

    reports = (
        query
        .order_by(WeatherReport.created_on.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )

    return reports, total
