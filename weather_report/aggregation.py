"""
Reducers that turn observation records into report figures.

All figures are ``Decimal`` values rounded to one decimal place with
``ROUND_HALF_EVEN``, so 0.25 rounds to 0.2 and 0.35 rounds to 0.4.
"""
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, Optional, Sequence

from .models import PrecipitationRecord, TemperatureRecord

RAIN = "rain"
SNOW = "snow"

ONE_DECIMAL = Decimal("0.1")


def round_one_decimal(value: Decimal) -> Decimal:
    """Round to one decimal place using banker's rounding."""
    return Decimal(value).quantize(ONE_DECIMAL, rounding=ROUND_HALF_EVEN)


def total_precipitation(records: Iterable[PrecipitationRecord], weather_type: str) -> Decimal:
    """
    Sum ``amount_inches`` over records of one weather type.

    The type comparison is exact, so "Rain" does not count as "rain".
    """
    total = sum(
        (record.amount_inches for record in records if record.weather_type == weather_type),
        Decimal(0),
    )
    return round_one_decimal(total)


def get_total_rain(records: Iterable[PrecipitationRecord]) -> Decimal:
    """Total rainfall in inches."""
    return total_precipitation(records, RAIN)


def get_total_snow(records: Iterable[PrecipitationRecord]) -> Decimal:
    """Total snowfall in inches."""
    return total_precipitation(records, SNOW)


def _mean(values: Sequence[Decimal]) -> Optional[Decimal]:
    if not values:
        return None
    return sum(values, Decimal(0)) / len(values)


def get_average_high(records: Sequence[TemperatureRecord]) -> Optional[Decimal]:
    """
    Mean daily high in Fahrenheit.

    Returns:
        Rounded mean, or None when there are no records
    """
    mean = _mean([record.temp_high_f for record in records])
    return None if mean is None else round_one_decimal(mean)


def get_average_low(records: Sequence[TemperatureRecord]) -> Optional[Decimal]:
    """
    Mean daily low in Fahrenheit.

    Returns:
        Rounded mean, or None when there are no records
    """
    mean = _mean([record.temp_low_f for record in records])
    return None if mean is None else round_one_decimal(mean)
