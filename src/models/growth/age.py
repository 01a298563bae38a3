from __future__ import annotations

from datetime import date, datetime
from typing import Union

from dateutil.parser import isoparse

from .config import DAYS_PER_MONTH, MONTHS_PER_YEAR
from .errors import ValidationError

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO 8601 string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return isoparse(value.strip()).date()
        except ValueError as e:
            raise ValidationError(f"Invalid date {value!r}: {e}") from e
    raise ValidationError(f"A date is required, got {value!r}")


def compute_age(birth_date: DateLike, measurement_date: DateLike) -> float:
    """
    Decimal age in years between two calendar dates.

    Whole days are converted with an average month of 30.44 days and
    12 months per year, so 2020-01-01 -> 2022-01-01 (731 days) is
    731 / 365.28 years, not exactly 2.
    """
    days = (to_date(measurement_date) - to_date(birth_date)).days
    return days / DAYS_PER_MONTH / MONTHS_PER_YEAR
