"""SQLAlchemy ORM models, upstream observation records and API schemas."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Optional
from sqlalchemy import Column, String, DateTime, Numeric, Uuid, Index
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from weather_report.database import Base


# ============================================================================
# SQLAlchemy ORM Models (Database Tables)
# ============================================================================

class WeatherReport(Base):
    """Aggregated precipitation and temperature report for a postal code."""
    __tablename__ = "weather_report"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    zip_code = Column(String(20), nullable=False, index=True)
    created_on = Column(DateTime(timezone=True), nullable=False)

    # Averages are NULL when the temperature provider returned no records
    average_high_f = Column(Numeric(6, 1), nullable=True)
    average_low_f = Column(Numeric(6, 1), nullable=True)
    rainfall_total_inches = Column(Numeric(8, 1), nullable=False)
    snow_total_inches = Column(Numeric(8, 1), nullable=False)

    __table_args__ = (
        Index('idx_weather_report_zip_created', 'zip_code', 'created_on'),
    )

    def __repr__(self) -> str:
        return f"<WeatherReport {self.zip_code} {self.created_on}>"


# ============================================================================
# Upstream Observation Records
# ============================================================================

# Readings outside this range are treated as undecodable provider data
MEASUREMENT_LIMIT = Decimal("1e12")

Measurement = Annotated[Decimal, Field(gt=-MEASUREMENT_LIMIT, lt=MEASUREMENT_LIMIT)]


class ObservationRecord(BaseModel):
    """
    Base for records decoded from an observation provider.

    Providers send camelCase keys; matching is case-insensitive so that
    ``weatherType``, ``WeatherType`` and ``weathertype`` all decode.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        aliases = {
            field.alias.lower(): field.alias
            for field in cls.model_fields.values()
            if field.alias
        }
        return {aliases.get(str(key).lower(), key): value for key, value in data.items()}


class PrecipitationRecord(ObservationRecord):
    """One precipitation observation ("rain", "snow" or another type)."""
    weather_type: str
    amount_inches: Measurement


class TemperatureRecord(ObservationRecord):
    """One daily temperature observation in Fahrenheit."""
    temp_high_f: Measurement
    temp_low_f: Measurement


# ============================================================================
# Pydantic Response Models (API Responses)
# ============================================================================

class WeatherReportResponse(BaseModel):
    """Weather report response, serialized with camelCase keys."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    zip_code: str
    created_on: datetime
    average_high_f: Optional[float] = None
    average_low_f: Optional[float] = None
    rainfall_total_inches: float
    snow_total_inches: float

    @field_validator("created_on")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Backends without timezone support return naive UTC timestamps."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class PaginatedResponse(BaseModel):
    """Paginated response wrapper."""
    total: int
    limit: int
    offset: int
    items: list[WeatherReportResponse]
