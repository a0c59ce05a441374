"""
Report builder

Fetches precipitation and temperature observations for a postal code,
reduces them to report figures and stores the resulting report.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

import requests
from prometheus_client import Counter
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .aggregation import get_average_high, get_average_low, get_total_rain, get_total_snow
from .config import WeatherDataConfig
from .crud import save_weather_report
from .exceptions import ReportPersistenceError
from .models import WeatherReport
from .observation_client import ObservationClient, create_http_session

logger = logging.getLogger(__name__)

REPORTS_BUILT = Counter(
    "weather_report_reports_built_total",
    "Weather report builds by outcome",
    ["outcome"]
)


class ReportBuilder:
    """Builds and persists one weather report per call."""

    def __init__(
        self,
        db: Session,
        config: WeatherDataConfig,
        session_factory: Callable[[], requests.Session] = create_http_session,
    ):
        """
        Initialize builder

        Args:
            db: Database session the report is stored through
            config: Upstream provider configuration
            session_factory: Produces a fresh HTTP session for each build
        """
        self.db = db
        self.config = config
        self.session_factory = session_factory

    def build_report(self, zip_code: str, days: int) -> WeatherReport:
        """
        Build, persist and return a report for the last ``days`` days.

        The precipitation provider is queried first, then the temperature
        provider. An undecodable provider body counts as no data.

        Args:
            zip_code: Postal code
            days: Number of days to look back

        Returns:
            The committed report

        Raises:
            UpstreamFetchError: If either provider fetch fails; nothing is stored
            ReportPersistenceError: If the report cannot be committed
        """
        try:
            with self.session_factory() as session:
                client = ObservationClient(self.config, session)

                precip_data = client.fetch_precipitation_data(zip_code, days)
                total_snow = get_total_snow(precip_data)
                total_rain = get_total_rain(precip_data)
                logger.info(
                    f"zip: {zip_code} over the last {days} days: "
                    f"total snow: {total_snow}, rain: {total_rain}"
                )

                temp_data = client.fetch_temperature_data(zip_code, days)
        except Exception:
            REPORTS_BUILT.labels(outcome="fetch_failed").inc()
            raise

        average_high = get_average_high(temp_data)
        average_low = get_average_low(temp_data)
        if not temp_data:
            logger.warning(
                f"zip: {zip_code}: no temperature records over the last {days} days, "
                f"averages left empty"
            )

        logger.info(
            f"zip: {zip_code} over the last {days} days: "
            f"total snow: {total_snow}, rain: {total_rain}, "
            f"average high: {average_high}, low: {average_low}"
        )

        report = WeatherReport(
            id=uuid.uuid4(),
            zip_code=zip_code,
            created_on=datetime.now(timezone.utc),
            average_high_f=average_high,
            average_low_f=average_low,
            rainfall_total_inches=total_rain,
            snow_total_inches=total_snow,
        )

        try:
            report = save_weather_report(self.db, report)
        except SQLAlchemyError as e:
            self.db.rollback()
            REPORTS_BUILT.labels(outcome="persist_failed").inc()
            logger.error(f"Failed to store report for zip {zip_code}: {e}")
            raise ReportPersistenceError(f"could not store report for zip {zip_code}") from e

        REPORTS_BUILT.labels(outcome="stored").inc()
        return report
