"""Client for the precipitation and temperature observation providers."""
import logging
import time
from decimal import Decimal
from typing import List

import requests
from prometheus_client import Counter, Histogram
from pydantic import TypeAdapter, ValidationError

from .config import WeatherDataConfig
from .exceptions import UpstreamFetchError
from .models import PrecipitationRecord, TemperatureRecord

logger = logging.getLogger(__name__)

PRECIPITATION = "precipitation"
TEMPERATURE = "temperature"

UPSTREAM_REQUEST_DURATION = Histogram(
    "weather_report_upstream_request_duration_seconds",
    "Observation provider request duration in seconds",
    ["source"]
)
DECODE_FALLBACKS = Counter(
    "weather_report_decode_fallbacks_total",
    "Provider responses that could not be decoded and were treated as empty",
    ["source"]
)

_PRECIPITATION_ADAPTER = TypeAdapter(List[PrecipitationRecord])
_TEMPERATURE_ADAPTER = TypeAdapter(List[TemperatureRecord])


def create_http_session() -> requests.Session:
    """Create the HTTP session used for one report build."""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


class ObservationClient:
    """Fetches observation records for a postal code from both providers."""

    def __init__(self, config: WeatherDataConfig, session: requests.Session):
        """Initialize observation client.

        Args:
            config: Upstream provider configuration
            session: HTTP session owned by the caller
        """
        self.config = config
        self.session = session

    def build_precipitation_endpoint(self, zip_code: str, days: int) -> str:
        """Observation URL on the precipitation provider."""
        return f"{self.config.precip_data_base_url}/observation/{zip_code}?days={days}"

    def build_temperature_endpoint(self, zip_code: str, days: int) -> str:
        """Observation URL on the temperature provider."""
        return f"{self.config.temp_data_base_url}/observation/{zip_code}?days={days}"

    def fetch_precipitation_data(self, zip_code: str, days: int) -> List[PrecipitationRecord]:
        """Fetch precipitation records for the last ``days`` days.

        Args:
            zip_code: Postal code
            days: Number of days to look back

        Returns:
            Decoded records, empty if the body could not be decoded

        Raises:
            UpstreamFetchError: If the provider cannot be reached
        """
        url = self.build_precipitation_endpoint(zip_code, days)
        response = self._get(PRECIPITATION, url)
        return self._decode(PRECIPITATION, response, _PRECIPITATION_ADAPTER)

    def fetch_temperature_data(self, zip_code: str, days: int) -> List[TemperatureRecord]:
        """Fetch temperature records for the last ``days`` days.

        Args:
            zip_code: Postal code
            days: Number of days to look back

        Returns:
            Decoded records, empty if the body could not be decoded

        Raises:
            UpstreamFetchError: If the provider cannot be reached
        """
        url = self.build_temperature_endpoint(zip_code, days)
        response = self._get(TEMPERATURE, url)
        return self._decode(TEMPERATURE, response, _TEMPERATURE_ADAPTER)

    def _get(self, source: str, url: str) -> requests.Response:
        logger.debug(f"Fetching {source} observations from {url}")
        start_time = time.time()
        try:
            response = self.session.get(url, timeout=self.config.upstream_timeout)
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {source} observations from {url}: {e}")
            raise UpstreamFetchError(source, url, str(e)) from e
        finally:
            UPSTREAM_REQUEST_DURATION.labels(source=source).observe(time.time() - start_time)
        return response

    def _decode(self, source: str, response: requests.Response, adapter: TypeAdapter) -> list:
        """Decode a JSON array body, falling back to an empty list.

        Amounts are parsed straight into ``Decimal`` so sums stay exact.
        The status code is not checked; an error body simply fails to decode.
        """
        if not response.ok:
            logger.warning(
                f"{source} provider answered {response.status_code} for {response.url}"
            )

        try:
            payload = response.json(parse_float=Decimal)
        except ValueError as e:
            return self._fallback(source, response, f"body is not JSON ({e})")

        if payload is None:
            return self._fallback(source, response, "body is null")

        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            return self._fallback(source, response, f"unexpected shape ({e.error_count()} errors)")

    def _fallback(self, source: str, response: requests.Response, reason: str) -> list:
        logger.warning(
            f"Treating {source} response from {response.url} "
            f"(status {response.status_code}) as empty: {reason}"
        )
        DECODE_FALLBACKS.labels(source=source).inc()
        return []
