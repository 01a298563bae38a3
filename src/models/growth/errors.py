from __future__ import annotations


class GrowthError(Exception):
    """Base class for every error raised by the growth engine."""


class ValidationError(GrowthError, ValueError):
    """A required input (birth date, height, weight) is missing."""


class RangeError(GrowthError, ValueError):
    """The computed age falls outside the supported 0-18 year window."""


class InvalidValueError(GrowthError, ValueError):
    """A value cannot be transformed (non-positive, non-finite, outside model support)."""


class UnknownTableError(GrowthError, KeyError):
    """No reference table is configured for the requested (sex, metric)."""

    def __init__(self, sex: object, metric: object) -> None:
        super().__init__(sex, metric)
        self.sex = sex
        self.metric = metric

    def __str__(self) -> str:
        return f"No reference table for sex={self.sex!r}, metric={self.metric!r}"


class MeasurementIndexError(GrowthError, IndexError):
    """Deletion of a measurement index that does not exist."""
